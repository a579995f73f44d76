"""KPI consistency check for generated narrative.

Flags percentages and benefit metrics that cannot be traced back to an
extracted KPI. Findings are informational: the content is kept as is.
"""

import re
from typing import List

from contracts import GeneratedContent, KpiInfo

PERCENT_PATTERN = re.compile(r"(\d+)%")


def check_kpi_consistency(content: GeneratedContent, kpis: List[KpiInfo]) -> List[str]:
    """Return a warning for every ungrounded metric in the content.

    Nothing can be grounded without KPIs, so no KPIs means no warnings.
    """
    warnings: List[str] = []
    if not kpis:
        return warnings

    targets = [k.target for k in kpis]

    for outcome in content.executive_summary.expected_outcomes:
        match = PERCENT_PATTERN.search(outcome)
        if not match:
            continue
        number = match.group(1)
        if not any(number in target or "%" in target for target in targets):
            warnings.append(f'Ungrounded metric in outcomes: "{outcome}" - no matching extracted KPI')

    lowered_targets = [t.lower() for t in targets]
    for benefit in content.executive_one_pager.key_benefits:
        if not benefit.metric:
            continue
        metric = benefit.metric.lower()
        first_word = metric.split(" ")[0]
        if not any(t in metric or first_word in t for t in lowered_targets):
            warnings.append(f'Ungrounded metric in one-pager: "{benefit.benefit}: {benefit.metric}"')

    return warnings
