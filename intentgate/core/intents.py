"""
Intents - Catalog loading and resolution

The catalog is a YAML document listing the units of work an agent may
declare. Each intent bounds what the agent can touch (owned_scope) and
what it must respect (constraints, acceptance_criteria).

Catalog shape (.orchestration/active_intents.yaml):

    active_intents:
      - id: INT-001
        name: Build the weather API
        constraints: ["No new dependencies"]
        owned_scope: ["src/api/**"]
        acceptance_criteria: ["All endpoints return JSON"]

A bare top-level list of records is accepted too.
Duplicate ids reject the whole catalog.
"""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import xxhash
import yaml
from rapidfuzz import process as fuzz_process

from .errors import CatalogMalformed, CatalogNotFound, IntentNotFound


logger = logging.getLogger(__name__)

CATALOG_KEY = "active_intents"

# Fields that reach the agent's context. Everything else stays in metadata.
CURATED_FIELDS = ("id", "name", "constraints", "owned_scope", "acceptance_criteria")

_LIST_FIELDS = ("constraints", "owned_scope", "acceptance_criteria")


@dataclass(frozen=True)
class Intent:
    """A declared unit of agent work. Immutable once loaded."""
    id: str
    name: str
    constraints: Tuple[str, ...] = ()
    owned_scope: Tuple[str, ...] = ()
    acceptance_criteria: Tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )

    def curated(self) -> Dict[str, Any]:
        """The minimal view of this intent that may be shown to the agent."""
        return {
            "intent_id": self.id,
            "name": self.name,
            "constraints": list(self.constraints),
            "owned_scope": list(self.owned_scope),
            "acceptance_criteria": list(self.acceptance_criteria),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int = 0) -> 'Intent':
        """Build an intent from one catalog record, validating its shape."""
        if not isinstance(data, dict):
            raise CatalogMalformed(
                f"Intent #{position} must be a mapping, got {type(data).__name__}"
            )

        for key in ("id", "name"):
            value = data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise CatalogMalformed(f"Intent #{position} is missing a string '{key}'")

        lists = {}
        for key in _LIST_FIELDS:
            value = data.get(key) or []
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise CatalogMalformed(
                    f"Intent '{data['id']}': '{key}' must be a list of strings"
                )
            lists[key] = tuple(value)

        extra = {k: v for k, v in data.items() if k not in CURATED_FIELDS}

        return cls(
            id=data["id"].strip(),
            name=data["name"],
            constraints=lists["constraints"],
            owned_scope=lists["owned_scope"],
            acceptance_criteria=lists["acceptance_criteria"],
            metadata=MappingProxyType(copy.deepcopy(extra)),
        )


class IntentStore:
    """
    Loads the intent catalog and resolves intents by id.

    The parsed catalog is cached against an xxhash digest of the raw
    bytes. Every call re-reads the file, so an edited catalog produces
    fresh Intent objects wholesale and never a mix of old and new.
    """

    def __init__(self, catalog_path: Path):
        self.catalog_path = Path(catalog_path)
        self._digest: Optional[str] = None
        self._intents: List[Intent] = []

    def load(self) -> List[Intent]:
        """Load all intents in catalog order."""
        try:
            raw = self.catalog_path.read_bytes()
        except FileNotFoundError:
            raise CatalogNotFound(f"Intent catalog not found: {self.catalog_path}")

        digest = xxhash.xxh64(raw).hexdigest()
        if digest == self._digest:
            return list(self._intents)

        self._intents = self._parse(raw)
        self._digest = digest
        logger.debug("Loaded %d intent(s) from %s", len(self._intents), self.catalog_path)
        return list(self._intents)

    def resolve(self, intent_id: str) -> Intent:
        """Find an intent by exact id."""
        intents = self.load()
        for intent in intents:
            if intent.id == intent_id:
                return intent

        known = [i.id for i in intents]
        raise IntentNotFound(self._not_found_message(intent_id, known))

    def ids(self) -> List[str]:
        return [i.id for i in self.load()]

    def _parse(self, raw: bytes) -> List[Intent]:
        try:
            data = yaml.safe_load(raw.decode("utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise CatalogMalformed(f"Intent catalog is not valid YAML: {e}")

        if isinstance(data, dict):
            records = data.get(CATALOG_KEY)
        else:
            records = data

        if not isinstance(records, list):
            raise CatalogMalformed(
                f"Intent catalog must contain a '{CATALOG_KEY}' list: {self.catalog_path}"
            )

        intents = []
        seen = set()
        for position, record in enumerate(records):
            intent = Intent.from_dict(record, position)
            if intent.id in seen:
                raise CatalogMalformed(f"Duplicate intent id in catalog: {intent.id}")
            seen.add(intent.id)
            intents.append(intent)
        return intents

    @staticmethod
    def _not_found_message(intent_id: str, known: List[str]) -> str:
        message = f"Intent not found: {intent_id}."
        if not known:
            return message + " The catalog is empty."

        matches = fuzz_process.extract(intent_id, known, limit=3, score_cutoff=60)
        if matches:
            suggestions = ", ".join(match[0] for match in matches)
            message += f" Did you mean: {suggestions}?"
        return message + f" Available: {', '.join(known)}"
