"""Engine core utilities: version, backlog, breakpoints, job system and text layout."""

__version__ = "0.15.10"

__all__ = ["atlas", "backlog", "debugger", "jobsystem", "label", "textlayout", "version"]