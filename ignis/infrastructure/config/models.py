"""
Configuration models for framework services.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = ("<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                   "<level>{level: <8}</level> | "
                   "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                   "<level>{message}</level>")
    console_enabled: bool = True
    file_enabled: bool = False
    log_directory: str = "logs"
    max_file_size: str = "10MB"
    backup_count: int = 5
    intercept_standard_logging: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'LoggingConfig':
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})
