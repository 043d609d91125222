"""Invoke the analysis engine as a child process."""

import logging
import subprocess

from config.categories import engine_analyzer
from core.errors import EngineFailedError, EngineSpawnError
from core.state import AnalysisRequest

logger = logging.getLogger(__name__)

ANALYZERS_FLAG = "--analyzers"


def build_arguments(request: AnalysisRequest):
    """Derive engine arguments from a request.

    The analyzer selection comes first, with category ids translated to the
    engine's analyzer names, then either each file as its own argument or the
    project path.
    """
    args = []
    if request.scan_types:
        args.extend([ANALYZERS_FLAG, ",".join(engine_analyzer(s) for s in request.scan_types)])
    args.extend(request.targets)
    return args


def run_engine(executable, request: AnalysisRequest, timeout=None):
    """Run the engine once and return (stdout, stderr, returncode).

    A non-zero exit is returned, not raised; the caller decides.

    Raises:
        EngineSpawnError: If the OS could not launch the executable.
        EngineFailedError: If the run exceeded timeout.
    """
    command = [executable] + build_arguments(request)
    logger.info("Running analysis engine: %s", command)

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Analysis engine timed out after %ss", timeout)
        raise EngineFailedError(
            None, stderr=f"Analysis engine timed out after {timeout}s", timed_out=True,
        )
    except OSError as e:
        raise EngineSpawnError(executable, str(e))

    if result.stderr:
        logger.debug("Analysis engine stderr: %s", result.stderr)
    logger.info("Engine exit status %s, stdout length %d",
                result.returncode, len(result.stdout or ""))
    return result.stdout or "", result.stderr or "", result.returncode
