"""
Text Segmenter

Splits a generated weekly plan into per-day sections. A section starts at a
'# Day N' or '## Day N' heading and runs until the next such heading or the
end of the text. Sections keep their original text, heading line included.
"""

import re
from typing import List, Tuple

DAY_HEADING = r"##?\s*Day (\d+)"

DAY_SECTION_PATTERN = re.compile(
    DAY_HEADING + r"[\s\S]*?(?=##?\s*Day \d+|\Z)"
)


def segment_days(text: str) -> List[Tuple[str, str]]:
    """
    Split plan text into (day_number, raw_segment) pairs in text order.

    Returns an empty list when the text has no day headings.
    """
    if not text:
        return []
    return [(m.group(1), m.group(0)) for m in DAY_SECTION_PATTERN.finditer(text)]
