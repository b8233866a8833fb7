"""
Page section editing.

Every operation takes the full section list and returns a new one; the
caller persists the whole list with a single company update. Order values
are renumbered to 0..n-1 after every structural change.
"""
from typing import Sequence

from pydantic import ValidationError

from careerpage.exceptions import DuplicateSectionError, NotFoundError, ValidationFailure
from careerpage.schemas.company import MoveDirection, PageSection, SectionType


EDITABLE_FIELDS = frozenset({"title", "content", "background_image_url", "is_visible"})


def sort_sections(sections: Sequence[PageSection]) -> list[PageSection]:
    """Stable sort by order; ties keep list position."""
    return sorted(sections, key=lambda s: s.order)


def normalize_order(sections: Sequence[PageSection]) -> list[PageSection]:
    return [
        section.model_copy(update={"order": index})
        for index, section in enumerate(sort_sections(sections))
    ]


def _index_of(sections: Sequence[PageSection], section_id: str) -> int:
    for index, section in enumerate(sections):
        if section.id == section_id:
            return index
    raise NotFoundError(f"Section {section_id} not found")


def add_section(sections: Sequence[PageSection], section_type: SectionType) -> list[PageSection]:
    """Append a new section after the current last one."""
    section_type = SectionType(section_type)
    if section_type is SectionType.JOBS and any(s.type == SectionType.JOBS.value for s in sections):
        raise DuplicateSectionError("This page already has a Jobs section")

    is_video = section_type is SectionType.VIDEO
    new_section = PageSection(
        type=section_type.value,
        title="Our Culture" if is_video else "New Section",
        content="" if is_video else "Add your content here...",
        order=max((s.order for s in sections), default=-1) + 1,
        is_visible=True,
    )
    return normalize_order([*sections, new_section])


def update_section(sections: Sequence[PageSection], section_id: str, fields: dict) -> list[PageSection]:
    """Change the editable fields of one section."""
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValidationFailure(f"Cannot edit section field(s): {', '.join(sorted(unknown))}")
    index = _index_of(sections, section_id)
    try:
        edited = PageSection.model_validate({**sections[index].model_dump(), **fields})
    except ValidationError as e:
        raise ValidationFailure(f"Invalid section fields: {e.errors()[0]['msg']}") from e
    updated = list(sections)
    updated[index] = edited
    return updated


def move_section(
    sections: Sequence[PageSection],
    section_id: str,
    direction: MoveDirection,
) -> list[PageSection]:
    """Swap a section with its neighbour; no-op at either end."""
    ordered = sort_sections(sections)
    index = _index_of(ordered, section_id)
    target = index - 1 if MoveDirection(direction) is MoveDirection.UP else index + 1
    if 0 <= target < len(ordered):
        ordered[index], ordered[target] = ordered[target], ordered[index]
    return [section.model_copy(update={"order": i}) for i, section in enumerate(ordered)]


def delete_section(sections: Sequence[PageSection], section_id: str) -> list[PageSection]:
    index = _index_of(sections, section_id)
    remaining = [s for i, s in enumerate(sections) if i != index]
    return normalize_order(remaining)
