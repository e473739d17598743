"""
Input/Output Manager (JSON + HDF5)
Handles pattern JSON import/export and the HDF5 pattern library.
"""
import json
import logging
import os
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, List, Optional

import h5py
import numpy as np

from beadcrafter.model.schema import Pattern, Row, SplitGroup, Bead, RowType, GroupSide

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("beadcrafter")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

# HDF5 attributes are limited to 64KB, bigger payloads go to a dataset
_ATTR_SIZE_LIMIT = 60000


class PatternFormatError(ValueError):
    """Raised when a pattern document does not match the schema."""


class PatternIO:

    # ---- dict <-> Pattern ----

    @staticmethod
    def pattern_to_dict(pattern: Pattern) -> Dict[str, Any]:
        rows = []
        for row in pattern.rows:
            row_dict: Dict[str, Any] = {
                "id": row.id,
                "rowType": str(row.row_type),
                "beads": [PatternIO._bead_to_dict(b) for b in row.beads],
            }
            if row.split_groups is not None:
                row_dict["splitGroups"] = [
                    {
                        "id": g.id,
                        "side": str(g.side),
                        "beads": [PatternIO._bead_to_dict(b) for b in g.beads],
                    }
                    for g in row.split_groups
                ]
            rows.append(row_dict)

        data: Dict[str, Any] = {
            "id": pattern.id,
            "name": pattern.name,
            "rows": rows,
            "colorPalette": list(pattern.color_palette),
        }
        if pattern.description is not None:
            data["description"] = pattern.description
        return data

    @staticmethod
    def pattern_from_dict(data: Dict[str, Any]) -> Pattern:
        if not isinstance(data, dict):
            raise PatternFormatError(f"Expected a JSON object, got {type(data).__name__}.")

        try:
            rows = [PatternIO._row_from_dict(r) for r in data.get("rows", [])]
            pattern = Pattern(
                id=str(data["id"]),
                name=str(data.get("name", data["id"])),
                rows=rows,
                description=data.get("description"),
                color_palette=[str(c) for c in data.get("colorPalette", [])],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PatternFormatError(f"Invalid pattern data: {e}") from e

        duplicates = pattern.validate_identities()
        if duplicates:
            logger.warning(f"Pattern '{pattern.id}' contains duplicate ids: {duplicates}")
        return pattern

    @staticmethod
    def _bead_to_dict(bead: Bead) -> Dict[str, str]:
        return {"id": bead.id, "colorCode": bead.color_code}

    @staticmethod
    def _bead_from_dict(data: Dict[str, Any]) -> Bead:
        return Bead(id=str(data["id"]), color_code=str(data["colorCode"]))

    @staticmethod
    def _row_from_dict(data: Dict[str, Any]) -> Row:
        # RowType()/GroupSide() raise ValueError on unknown values
        row_type = RowType(data.get("rowType", RowType.SINGLE))
        beads = [PatternIO._bead_from_dict(b) for b in data.get("beads", [])]

        split_groups: Optional[List[SplitGroup]] = None
        if data.get("splitGroups") is not None:
            split_groups = [
                SplitGroup(
                    id=str(g["id"]),
                    side=GroupSide(g["side"]),
                    beads=[PatternIO._bead_from_dict(b) for b in g.get("beads", [])],
                )
                for g in data["splitGroups"]
            ]

        return Row(id=str(data["id"]), row_type=row_type, beads=beads, split_groups=split_groups)

    # ---- single pattern JSON ----

    @staticmethod
    def export_pattern_json(pattern: Pattern, filepath: str) -> None:
        logger.info(f"Exporting pattern '{pattern.id}' to: {filepath}")
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(PatternIO.pattern_to_dict(pattern), f, ensure_ascii=False, indent=2)

    @staticmethod
    def import_pattern_json(filepath: str) -> Pattern:
        logger.info(f"Importing pattern from: {filepath}")
        with open(filepath, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise PatternFormatError(f"File '{filepath}' is not valid JSON: {e}") from e
        return PatternIO.pattern_from_dict(data)


class PatternLibrary:
    """
    Saved patterns, persisted as one HDF5 file.

    Layout: /patterns/<n> groups, each holding the pattern JSON in the
    'pattern_json' attribute (or dataset when large) plus 'pattern_id'.
    The whole file is rewritten on every change.
    """

    def __init__(self, filepath: str) -> None:
        self.filepath = filepath
        self._patterns: List[Pattern] = []

    def list_patterns(self) -> List[Pattern]:
        return list(self._patterns)

    def get(self, pattern_id: str) -> Optional[Pattern]:
        for p in self._patterns:
            if p.id == pattern_id:
                return p
        return None

    def load(self) -> List[Pattern]:
        self._patterns = []
        if not os.path.exists(self.filepath):
            logger.info(f"No pattern library at {self.filepath}, starting empty.")
            return []

        if not h5py.is_hdf5(self.filepath):
            msg = f"File '{self.filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise PatternFormatError(msg)

        with h5py.File(self.filepath, "r") as f:
            grp_patterns = f.get("patterns")
            if grp_patterns is None:
                return []

            # Group names are zero padded indices, sorted() keeps saved order
            for key in sorted(grp_patterns.keys()):
                grp = grp_patterns[key]
                if "pattern_json" in grp:
                    payload = bytes(grp["pattern_json"][()]).decode("utf-8")
                else:
                    payload = grp.attrs.get("pattern_json", "")
                if isinstance(payload, bytes):
                    payload = payload.decode("utf-8")

                try:
                    self._patterns.append(PatternIO.pattern_from_dict(json.loads(payload)))
                except (json.JSONDecodeError, PatternFormatError) as e:
                    logger.error(f"Skipping unreadable library entry '{key}': {e}")

        logger.info(f"Loaded {len(self._patterns)} patterns from {self.filepath}")
        return self.list_patterns()

    def save_pattern(self, pattern: Pattern) -> None:
        """Insert, or replace the entry with the same id."""
        for i, existing in enumerate(self._patterns):
            if existing.id == pattern.id:
                self._patterns[i] = pattern
                break
        else:
            self._patterns.append(pattern)
        self._write()

    def delete_pattern(self, pattern_id: str) -> None:
        self._patterns = [p for p in self._patterns if p.id != pattern_id]
        self._write()

    def _write(self) -> None:
        logger.info(f"Saving {len(self._patterns)} patterns to: {self.filepath}")
        directory = os.path.dirname(self.filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        try:
            with h5py.File(self.filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                grp_patterns = f.create_group("patterns")

                for i, pattern in enumerate(self._patterns):
                    grp = grp_patterns.create_group(f"{i:05d}")
                    grp.attrs["pattern_id"] = pattern.id
                    payload = json.dumps(PatternIO.pattern_to_dict(pattern), ensure_ascii=False)

                    if len(payload.encode("utf-8")) > _ATTR_SIZE_LIMIT:
                        logger.debug(f"Pattern '{pattern.id}' is large, using dataset")
                        grp.create_dataset("pattern_json", data=np.void(payload.encode("utf-8")))
                    else:
                        grp.attrs["pattern_json"] = payload
        except Exception as e:
            logger.exception(f"Failed to save pattern library: {e}")
            raise
