from __future__ import annotations

from typing import Iterable, Mapping, Optional

from .content import (
    INVALID_TYPE_REPLY,
    MENU,
    NO_RESULTS_REPLY,
    RESULTS_HEADER,
    SAVE_PROMPT,
    WING_DESCRIPTORS,
    WingDescriptor,
)
from .content_loader import default_wing_details
from .models import ResultSummary

BULLET_INDENT = "\n   - "


class UnknownPersonalityTypeError(KeyError):
    """Raised when a personality type has no registered wing descriptor."""


def wing_descriptor(personality_type: str) -> WingDescriptor:
    """Purpose: Fetch the wing descriptor registered for a base type.
    Inputs/Outputs: Input is a type such as "5"; output is its WingDescriptor.
    Side Effects / State: None.
    Failure Modes: Raises UnknownPersonalityTypeError for types outside 1-9.
    Testing Notes: "5" -> 5w4/5w6; "10" raises.
    """
    descriptor = WING_DESCRIPTORS.get(str(personality_type).strip())
    if descriptor is None:
        raise UnknownPersonalityTypeError(personality_type)
    return descriptor


def assemble_wing_prompt(personality_type: str) -> str:
    """Purpose: Render the wing-choice question for a classified base type.
    Inputs/Outputs: Input is the base type; output lists both wing labels with their
        trait bullets, or the invalid-type reply when the type is unknown.
    Side Effects / State: None; pure function.
    Dependencies: wing_descriptor.
    Failure Modes: Unknown types are reported as text, never raised.
    Testing Notes: Prompt for "5" contains "1) 5w4" and "2) 5w6".
    """
    try:
        wing = wing_descriptor(personality_type)
    except UnknownPersonalityTypeError:
        return INVALID_TYPE_REPLY
    return (
        f"당신의 기본 유형은 {personality_type}번입니다.\n\n날개를 선택하세요:\n"
        f"1) {wing.left_label}{BULLET_INDENT}{BULLET_INDENT.join(wing.left)}\n\n"
        f"2) {wing.right_label}{BULLET_INDENT}{BULLET_INDENT.join(wing.right)}"
    )


def assemble_result(
    personality_type: str,
    wing_label: str,
    details: Optional[Mapping[str, str]] = None,
) -> str:
    """Purpose: Build the final result message shown after a wing is chosen.
    Inputs/Outputs: Inputs are the base type, the wing label and an optional
        label -> description mapping (defaults to the packaged descriptions); output is
        header, long description and the save prompt separated by blank lines.
    Side Effects / State: None; the packaged descriptions are read once and cached.
    Failure Modes: A label without a description yields an empty detail block.
    Testing Notes: ("5", "5w4") contains "결과: 5w4 (기본 타입 5)".
    """
    if details is None:
        details = default_wing_details()
    header = f"✨ 결과: {wing_label} (기본 타입 {personality_type})"
    detail = details.get(wing_label, "")
    return f"{header}\n\n{detail}\n\n{SAVE_PROMPT}"


def format_result_listing(results: Iterable[ResultSummary]) -> str:
    """Render stored results, one per line, followed by the menu.

    A result saved without a display name is listed with an empty name.
    """
    lines = [
        f"{result.display_name or ''}: {result.wing_label} (기본 타입 {result.personality_type})"
        for result in results
    ]
    if not lines:
        return NO_RESULTS_REPLY
    return RESULTS_HEADER + "\n" + "\n".join(lines) + "\n\n" + MENU
