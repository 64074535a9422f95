"""
errors.py — Exception Hierarchy
================================
Everything the core raises derives from SmartRouteError so the HTTP
driver can turn it into a 400 in one place.

    SmartRouteError
      ├── SelectionError          missing / identical source & target
      ├── UnknownAlgorithmError   algorithm tag outside {bfs, dijkstra, astar}
      ├── ConfigError             bad playback configuration value
      └── MalformedStepError      trace entry missing expected fields

An unreachable target is NOT an error; it is a normal SearchResult
with path = None.
"""


class SmartRouteError(Exception):
    """Base class for every error raised by the search / playback core."""


class SelectionError(SmartRouteError):
    pass


class UnknownAlgorithmError(SmartRouteError, ValueError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown algorithm: {name!r}")


class ConfigError(SmartRouteError, ValueError):
    pass


class MalformedStepError(SmartRouteError):
    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Step {index} is malformed: {reason}")
