"""
CONFIG ENGINE (ENGINE-0)
Load, validate, and expose engine configuration

RESPONSIBILITIES:
- Load YAML configuration files
- Validate configuration integrity
- Expose read-only typed objects

RULES:
❌ No silent fallback when a config file is missing
✅ Fail fast on invalid config
✅ Deterministic output
"""

import logging
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from inventory_engine.domain.models import RestrictionCategory, RestrictionType
from inventory_engine.domain.models.thresholds import (
    ClassifierThresholds,
    RestrictionLimits,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestrictionTypeCatalog:
    """Collection of all configured restriction types"""
    types: Tuple[RestrictionType, ...]

    def get(self, type_id: str) -> RestrictionType:
        """Get restriction type by id"""
        for restriction_type in self.types:
            if restriction_type.id == type_id:
                return restriction_type
        raise ValueError(f"Restriction type not found: {type_id}")

    def find(self, type_id: str) -> Optional[RestrictionType]:
        for restriction_type in self.types:
            if restriction_type.id == type_id:
                return restriction_type
        return None

    @property
    def ids(self) -> List[str]:
        return [t.id for t in self.types]

    def by_priority(self) -> List[RestrictionType]:
        """Types ordered from highest to lowest priority"""
        return sorted(self.types, key=lambda t: t.priority, reverse=True)


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for restriction catalog and classifier thresholds
    """

    def __init__(self, config_dir: Path):
        """Initialize with config directory"""
        self.config_dir = Path(config_dir)
        self._restriction_types: Optional[RestrictionTypeCatalog] = None
        self._thresholds: Optional[ClassifierThresholds] = None
        self._restriction_limits: Optional[RestrictionLimits] = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_restriction_types()
        self._load_classifier()
        logger.info(
            "Loaded %d restriction types from %s",
            len(self._restriction_types.types),
            self.config_dir,
        )

    def _read_yaml(self, filename: str) -> Dict:
        path = self.config_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    def _load_restriction_types(self) -> None:
        """Load restriction catalog from restriction_types.yml"""
        data = self._read_yaml("restriction_types.yml")

        types = []
        for entry in data.get("restriction_types", []):
            try:
                category = RestrictionCategory(entry["category"])
            except ValueError:
                raise ValueError(
                    f"Invalid category '{entry['category']}' for restriction type {entry.get('id')}"
                )
            types.append(
                RestrictionType(
                    id=entry["id"],
                    code=entry["code"],
                    name=entry["name"],
                    category=category,
                    priority=int(entry["priority"]),
                    color=entry["color"],
                    description=entry.get("description", ""),
                    icon=entry.get("icon", ""),
                    needs_value=bool(entry.get("needs_value", False)),
                )
            )

        if not types:
            raise ValueError("No restriction types configured")

        ids = [t.id for t in types]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate restriction type ids found in configuration")

        self._restriction_types = RestrictionTypeCatalog(types=tuple(types))

    def _load_classifier(self) -> None:
        """Load thresholds and operator limits from classifier.yml"""
        data = self._read_yaml("classifier.yml")

        self._thresholds = ClassifierThresholds(**(data.get("classifier") or {}))
        self._restriction_limits = RestrictionLimits(**(data.get("restrictions") or {}))

    @property
    def restriction_types(self) -> RestrictionTypeCatalog:
        if self._restriction_types is None:
            raise RuntimeError("Config not loaded; call load_all() first")
        return self._restriction_types

    @property
    def thresholds(self) -> ClassifierThresholds:
        if self._thresholds is None:
            raise RuntimeError("Config not loaded; call load_all() first")
        return self._thresholds

    @property
    def restriction_limits(self) -> RestrictionLimits:
        if self._restriction_limits is None:
            raise RuntimeError("Config not loaded; call load_all() first")
        return self._restriction_limits
