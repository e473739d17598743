"""Built-in Sample Patterns (Catalog)."""
from typing import Dict, List, Optional, Sequence, Tuple

from beadcrafter.model.schema import Pattern, Row, SplitGroup, Bead, RowType, GroupSide


# ------------------------------------------------------------------------------
# Builders
# ------------------------------------------------------------------------------
def make_beads(owner_id: str, colors: Sequence[str]) -> List[Bead]:
    """Beads with ids derived from the owning row/group, e.g. 'r3-b0'."""
    return [Bead(id=f"{owner_id}-b{i}", color_code=c) for i, c in enumerate(colors)]


def single_row(row_id: str, colors: str) -> Row:
    """Row from a space separated color string, e.g. single_row('r1', 'B W B')."""
    return Row(id=row_id, row_type=RowType.SINGLE, beads=make_beads(row_id, colors.split()))


def split_row(row_id: str, groups: Sequence[Tuple[GroupSide, str]]) -> Row:
    """Split row from (side, color string) pairs, kept in the given order."""
    split_groups = []
    for side, colors in groups:
        group_id = f"{row_id}-{side.value}"
        split_groups.append(SplitGroup(id=group_id, side=side, beads=make_beads(group_id, colors.split())))
    return Row(id=row_id, row_type=RowType.SPLIT, split_groups=split_groups)


def _rows(*color_rows: str) -> List[Row]:
    return [single_row(f"r{i + 1}", colors) for i, colors in enumerate(color_rows)]


# ------------------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------------------
def penguin() -> Pattern:
    return Pattern(
        id="penguin-001",
        name="Penguin",
        description="A cute black and white penguin with orange beak and feet",
        rows=_rows(
            "B", "B B B", "B W B", "B W W B",   # head
            "B W O W B", "B W W W B",           # beak
            "B W W W B", "B W W W B", "B W W W B", "B W W B", "B W B",  # body
            "O O",                              # feet
        ),
        color_palette=["B", "W", "O"],
    )


def frog() -> Pattern:
    return Pattern(
        id="frog-001",
        name="Frog",
        description="A green frog with big eyes",
        rows=_rows(
            "G G", "B G G B",
            "G G G G", "G G G G G", "G G G G G G",
            "G G G G G G G", "G G G G G G", "G G G G G", "G G G G",
            "G G",
        ),
        color_palette=["G", "B"],
    )


def butterfly() -> Pattern:
    return Pattern(
        id="butterfly-001",
        name="Butterfly",
        description="A beautiful butterfly with metallic wings",
        rows=_rows(
            "MB MB",
            "MB MB MB MB MB", "MB MB MB",
            "MP MP MP", "MP MP MP MP",
            "MB MP MP MP MB", "MB MP MP MB",
            "MP MP MP", "MP MP", "MP",
        ),
        color_palette=["MB", "MP"],
    )


def bunny() -> Pattern:
    return Pattern(
        id="bunny-001",
        name="Bunny",
        description="A cute pink bunny rabbit",
        rows=_rows(
            "P P P P", "P P P P", "P P P",
            "P W W P", "P W W W P", "P W P W P",
            "W W W", "W W W W", "W W W",
            "Y Y Y Y",
        ),
        color_palette=["P", "W", "Y"],
    )


def kitten() -> Pattern:
    return Pattern(
        id="kitten-001",
        name="Kitten",
        description="An adorable brown and white kitten",
        rows=_rows(
            "Br Br", "Br T T Br",
            "Br T T Br", "T T T T T",
            "T B T B T", "T T P T T",
            "Br W W Br", "B W P W B", "Br W W Br",
            "B W W B",
        ),
        color_palette=["Br", "T", "W", "B", "P"],
    )


def dog() -> Pattern:
    return Pattern(
        id="dog-001",
        name="Dog",
        description="A friendly tan and black dog",
        rows=_rows(
            "B", "B T T T",
            "B T T T", "T T T T T",
            "MB T MB", "T MS B MS T",
            "T T T T T", "T T T T", "T T T",
            "T MS MS T", "T T T",
        ),
        color_palette=["T", "B", "MB", "MS"],
    )


def gecko() -> Pattern:
    """Gecko with split rows for the legs and the tail."""
    rows = _rows("LG LG", "B LG LG B", "LG LG LG", "LG Y LG")
    rows.append(split_row("r5", [(GroupSide.LEFT, "LG LG"), (GroupSide.RIGHT, "LG LG")]))
    rows.append(single_row("r6", "LG Y Y LG"))
    rows.append(split_row("r7", [
        (GroupSide.LEFT, "LG LG"),
        (GroupSide.CENTER, "LG LG LG"),
        (GroupSide.RIGHT, "LG LG"),
    ]))
    return Pattern(
        id="gecko-001",
        name="Gecko",
        description="A light green gecko with legs and tail strung as limbs",
        rows=rows,
        color_palette=["LG", "B", "Y"],
    )


def sample_patterns() -> List[Pattern]:
    """Fresh copies of every sample, safe to edit."""
    return [penguin(), frog(), butterfly(), bunny(), kitten(), dog(), gecko()]


SAMPLE_PATTERN_IDS: Dict[str, str] = {p.id: p.name for p in sample_patterns()}


def get_sample_pattern(pattern_id: str) -> Optional[Pattern]:
    for pattern in sample_patterns():
        if pattern.id == pattern_id:
            return pattern
    return None
