"""Safety setting defaults and the per-category override merge."""

from collections.abc import Sequence

from gemini_bridge.models.request import HarmBlockThreshold, HarmCategory, SafetySetting


DEFAULT_SAFETY_SETTINGS: tuple[SafetySetting, ...] = tuple(
    SafetySetting(category=category, threshold=HarmBlockThreshold.BLOCK_NONE)
    for category in (
        HarmCategory.HARASSMENT,
        HarmCategory.HATE_SPEECH,
        HarmCategory.SEXUALLY_EXPLICIT,
        HarmCategory.DANGEROUS_CONTENT,
    )
)


def merge_safety_settings(
    defaults: Sequence[SafetySetting],
    overrides: Sequence[SafetySetting] | None = None,
) -> list[SafetySetting]:
    """
    Merge caller overrides into the default safety table.

    The result has exactly one entry per default category, in the order of
    `defaults`. Overrides without a threshold are ignored, and overrides for
    categories missing from `defaults` are never added.

    Args:
        defaults: Default table, one entry per category
        overrides: Caller supplied settings; the first one per category wins

    Returns:
        A new list; `defaults` is never handed back by reference
    """
    if not overrides:
        return [setting.model_copy() for setting in defaults]

    chosen: dict[HarmCategory, HarmBlockThreshold] = {}
    for override in overrides:
        if override.threshold is not None:
            chosen.setdefault(override.category, override.threshold)

    return [
        SafetySetting(
            category=setting.category,
            threshold=chosen.get(setting.category, setting.threshold),
        )
        for setting in defaults
    ]
