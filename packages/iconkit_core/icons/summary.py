"""Preview of the files a generation run will produce, without image work."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from .plan import AssetSummaryEntry, plan_icon_set


def build_asset_summary(
    platforms: Optional[Mapping[str, bool]],
    *,
    single_size: bool = False,
    appearances: Optional[Iterable[str]] = None,
    variant_name: Optional[str] = None,
) -> list[AssetSummaryEntry]:
    plan = plan_icon_set(
        platforms,
        single_size=single_size,
        appearances=appearances,
        variant_name=variant_name,
    )
    return [output.summary_entry() for output in plan.outputs]
