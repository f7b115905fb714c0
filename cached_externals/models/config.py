"""Configuration data models"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_LOCAL_EXTERNALS_DIR, DEFAULT_MANIFEST_PATH, Stage


@dataclass
class ExternalsConfig:
    """Settings for an externals run

    ``shared_path`` and ``latest_release`` describe the deployment target and
    are only consulted in remote mode.
    """

    stage: Stage = Stage.REMOTE
    manifest_path: str = DEFAULT_MANIFEST_PATH
    externals_dir: str = DEFAULT_LOCAL_EXTERNALS_DIR

    # Remote target
    shared_path: Optional[str] = None
    latest_release: Optional[str] = None
    host: Optional[str] = None
    ssh_user: Optional[str] = None
    ssh_port: Optional[int] = None

    # Modules providing SCM implementations
    scm_modules: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.stage, Stage):
            self.stage = Stage(self.stage)

    @property
    def is_local(self) -> bool:
        """Check if externals are applied to the local working copy"""
        return self.stage == Stage.LOCAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"stage": self.stage.value}
        for f in fields(self):
            if f.name == "stage":
                continue
            value = getattr(self, f.name)
            if value is not None and value != []:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExternalsConfig':
        """Create from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in (data or {}).items() if k in known and v is not None}
        return cls(**kwargs)

    def merge(self, overrides: Dict[str, Any]) -> 'ExternalsConfig':
        """Return a copy with non-None overrides applied"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ExternalsConfig.from_dict(data)
