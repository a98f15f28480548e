import argparse
import logging
import os
import sys
import termios

import numpy as np

from floodpaint.config import FillConfig
from floodpaint.engine import FillEngine
from floodpaint.terminal import TerminalSession

DEBUG_ENV = "FLOODPAINT_DEBUG"
LOG_PATH = "/tmp/floodpaint.log"

logger = logging.getLogger("floodpaint")


def configure_logging() -> None:
    """Log to a file when debugging; stdout is the canvas, so nothing goes there."""
    if os.environ.get(DEBUG_ENV, "0") in ("1", "true", "True"):
        logging.basicConfig(
            filename=LOG_PATH,
            level=logging.DEBUG,
            format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
        )
    else:
        logger.addHandler(logging.NullHandler())


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Paint the terminal with a slowly spreading random colour field. Press q to quit."
    )
    parser.parse_args(argv)
    configure_logging()

    config = FillConfig()
    engine = FillEngine(config, rng=np.random.default_rng())
    try:
        with TerminalSession(quit_key=config.quit_key) as sink:
            cycles = engine.run(sink)
    except KeyboardInterrupt:
        return
    except (OSError, termios.error) as e:
        logger.error("Terminal failure: %s", e)
        print(f"floodpaint: terminal error: {e}", file=sys.stderr)
        sys.exit(1)
    logger.debug("Exited after %d completed cycle(s)", cycles)
