import logging
import time
from typing import Optional

from pcmstream.adapters.stream_in import InputAdapter
from pcmstream.adapters.stream_out import OutputAdapter
from pcmstream.core.logging import new_correlation_id
from pcmstream.core.metrics import metrics

logger = logging.getLogger(__name__)

class PipelineDriver:
    """
    Synchronous driver for a pull pipeline ending in an OutputAdapter.

    Steps the output until the upstream is exhausted or stop() is requested.
    When a source InputAdapter is given and its loop flag is set, the source
    is rewound to the start of its playback range after each pass.
    """

    def __init__(self, output: OutputAdapter, source: Optional[InputAdapter] = None,
                 max_passes: Optional[int] = None):
        self.output = output
        self.source = source
        self.max_passes = max_passes
        self.passes = 0
        self._stop_requested = False

    def stop(self):
        """Abort the run at the next step."""
        self._stop_requested = True

    def run(self) -> int:
        cid = new_correlation_id()
        self._stop_requested = False
        self.passes = 0
        started = time.perf_counter()

        logger.info("Pipeline run started", extra={"run_id": cid})
        self.output.prepare()
        try:
            while True:
                self.passes += 1
                pass_start = self.output.bytes_written
                while self.output.step(abort=self._stop_requested):
                    pass

                if self._stop_requested:
                    logger.info("Pipeline run aborted")
                    break
                if not self._should_loop(self.output.bytes_written - pass_start):
                    break
                self.source.seek(self.source.start_sample)
        except Exception as e:
            logger.error(f"Pipeline run failed: {e}", exc_info=True)
            raise
        finally:
            written = self.output.bytes_written
            self.output.done()
            elapsed_ms = (time.perf_counter() - started) * 1000
            metrics.record_latency("pipeline.run", elapsed_ms)

        logger.info(f"Pipeline run complete: {written} bytes in {self.passes} pass(es)",
                    extra={"bytes_written": written, "passes": self.passes})
        return written

    def _should_loop(self, pass_bytes: int) -> bool:
        if self.source is None or not self.source.loop:
            return False
        if pass_bytes == 0:
            # Nothing came through; looping would spin forever
            return False
        if not self.source.seekable:
            logger.warning("Loop requested but the source is not seekable")
            return False
        if self.max_passes is not None and self.passes >= self.max_passes:
            return False
        return True
