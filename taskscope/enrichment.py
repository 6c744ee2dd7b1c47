"""
Post-mapping enrichment of CreatableEvents.

Runs once per export call, after mapping and before the events reach the
repository:
  - ``{key}`` placeholders in the message are filled from the event's
    properties (``{key!r}`` renders the repr); unknown keys stay verbatim.
  - AI spans get a style icon hint unless a style icon is already set.
"""

import re

from taskscope.models.pydantic_models.events import CreatableEvent, Scalar

_PLACEHOLDER = re.compile(r"\{([^{}!]+?)(!r)?\}")


def format_message(template: str, values: dict[str, Scalar] | None) -> str:
    if "{" not in template or not values:
        return template

    def _replace(match: re.Match) -> str:
        key, as_repr = match.group(1), match.group(2)
        if key not in values:
            return match.group(0)
        value = values[key]
        return repr(value) if as_repr else str(value)

    return _PLACEHOLDER.sub(_replace, template)


def _style_icon(event: CreatableEvent) -> str | None:
    properties = event.properties or {}

    system = properties.get("gen_ai.system")
    if isinstance(system, str) and system:
        return f"tabler-brand-{system.split('.')[0]}"

    if event.message == "ai.toolCall":
        return "tabler-tool"
    if event.message.startswith("ai."):
        return "tabler-sparkles"
    return None


def enrich_style(event: CreatableEvent):
    style = event.style
    # A scalar style was set explicitly through the "$style" sentinel
    if style is not None and not isinstance(style, dict):
        return style
    if style and "icon" in style:
        return style

    icon = _style_icon(event)
    if icon is None:
        return style
    return {**(style or {}), "icon": icon}


def enrich_creatable_event(event: CreatableEvent) -> CreatableEvent:
    return event.model_copy(
        update={
            "message": format_message(event.message, event.properties),
            "style": enrich_style(event),
        }
    )


def enrich_creatable_events(events: list[CreatableEvent]) -> list[CreatableEvent]:
    return [enrich_creatable_event(event) for event in events]
