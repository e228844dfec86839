import re
from typing import Iterable, List, Optional

WHITESPACE = re.compile(r'\s+')
ZERO_WIDTH = re.compile('[\u200b\u200e\u200f\ufeff]')

def normalize_text(s: Optional[str]) -> str:
    if not s:
        return ''
    s = s.replace('\u00A0', ' ')
    s = ZERO_WIDTH.sub('', s)
    s = WHITESPACE.sub(' ', s).strip()
    return s

def normalize_lines(items: Iterable[Optional[str]]) -> List[str]:
    """Normalize each entry and drop the ones that end up empty."""
    out = []
    for item in items:
        text = normalize_text(item)
        if text:
            out.append(text)
    return out
