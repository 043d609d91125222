"""Failure kinds of the analysis pipeline. None of them is fatal to the host."""


class AnalysisError(Exception):
    """Base class for recoverable pipeline failures."""


class EngineNotFoundError(AnalysisError):
    def __init__(self, candidates):
        self.candidates = list(candidates)
        listing = "\n".join(f"  - {c}" for c in self.candidates)
        super().__init__(f"Analysis engine binary not found. Searched paths:\n{listing}")


class EngineSpawnError(AnalysisError):
    def __init__(self, executable, reason):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to execute analysis engine: {reason}")


class EngineFailedError(AnalysisError):
    """The engine ran but did not succeed. returncode is None on timeout."""

    def __init__(self, returncode, stdout="", stderr="", timed_out=False):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out
        detail = stdout.strip() or stderr.strip() or f"exit status {returncode}"
        super().__init__(f"Analysis failed: {detail}")


class ReportWriteError(AnalysisError):
    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to write report {self.path}: {reason}")
