"""Application settings dataclasses."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

HEURISTIC_NAMES = ("manhattan", "euclidean", "octile", "chebyshev", "zero")
ALGORITHM_NAMES = ("a_star", "dijkstra")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# CSR builds sample process memory on every snapshot at DEBUG
DEFAULT_COMPONENT_LEVELS = {"algorithms.base.csr": "INFO"}


@dataclass
class RoutingSettings:
    """Settings for the shortest-path engine."""
    heuristic: str = "manhattan"
    algorithm: str = "a_star"
    diagonal_mode: bool = False
    default_net: int = 0
    
    def validate(self) -> List[str]:
        """Return a list of validation errors (empty when valid)."""
        errors = []
        if self.heuristic.lower() not in HEURISTIC_NAMES:
            errors.append(f"Unknown heuristic '{self.heuristic}', expected one of {HEURISTIC_NAMES}")
        if self.algorithm.lower() not in ALGORITHM_NAMES:
            errors.append(f"Unknown algorithm '{self.algorithm}', expected one of {ALGORITHM_NAMES}")
        if not isinstance(self.diagonal_mode, bool):
            errors.append("diagonal_mode must be a boolean")
        if isinstance(self.default_net, bool) or not isinstance(self.default_net, int) or self.default_net < 0:
            errors.append(f"default_net must be a non-negative integer, got {self.default_net!r}")
        return errors
    
    def create_config(self, graph, goal: Optional[int], boundary: Tuple[int, int],
                      net: Optional[int] = None):
        """Build a ``ShortestPathConfig`` from these settings."""
        from ...domain.services.pathfinder import PathHeuristic, ShortestPathConfig
        
        return ShortestPathConfig(
            graph=graph,
            goal=goal,
            boundary=boundary,
            net=self.default_net if net is None else net,
            heuristic=PathHeuristic.from_name(self.heuristic),
        )


@dataclass
class LoggingSettings:
    """Logging configuration."""
    level: str = "INFO"
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_output: bool = True
    file_output: bool = False
    log_file: str = "logs/latticeroute.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    component_levels: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_COMPONENT_LEVELS)
    )
    
    def validate(self) -> List[str]:
        """Return a list of validation errors (empty when valid)."""
        errors = []
        if self.level.upper() not in LOG_LEVELS:
            errors.append(f"Unknown log level '{self.level}'")
        for component, level in self.component_levels.items():
            if level.upper() not in LOG_LEVELS:
                errors.append(f"Unknown log level '{level}' for component '{component}'")
        if self.max_file_size_mb <= 0:
            errors.append("max_file_size_mb must be positive")
        if self.backup_count < 0:
            errors.append("backup_count must be non-negative")
        return errors


@dataclass
class ApplicationSettings:
    """Top-level settings container."""
    version: str = "0.1.0"
    config_version: int = 1
    routing: RoutingSettings = field(default_factory=RoutingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    
    def validate(self) -> Dict[str, List[str]]:
        """Validate every settings category."""
        return {
            "routing": self.routing.validate(),
            "logging": self.logging.validate(),
        }
