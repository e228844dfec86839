from pathlib import Path
from typing import List

from .models import ProductRecord

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

SYSTEM_PROMPT_PATH = PROMPTS_DIR / "system_prompt.md"
OPTIMIZE_PROMPT_PATH = PROMPTS_DIR / "optimize_user_prompt.md"
BRAND_VOICE_PROMPT_PATH = PROMPTS_DIR / "brand_voice_prompt.md"
BULLETS_PROMPT_PATH = PROMPTS_DIR / "bullets_prompt.md"
DESCRIPTION_PROMPT_PATH = PROMPTS_DIR / "description_prompt.md"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8").strip()


def system_prompt() -> str:
    return _read(SYSTEM_PROMPT_PATH)


def build_optimization_prompt(product: ProductRecord) -> str:
    return _read(OPTIMIZE_PROMPT_PATH).format(
        title=product.title,
        brand=product.brand,
        description=product.description,
        bullets="\n".join(product.bullets),
    )


def build_brand_voice_prompt(current_voice: str, product_context: str) -> str:
    return _read(BRAND_VOICE_PROMPT_PATH).format(current=current_voice, context=product_context)


def build_bullets_prompt(current_bullets: List[str], product_context: str) -> str:
    numbered = "\n".join(f"{i}. {b}" for i, b in enumerate(current_bullets, 1))
    return _read(BULLETS_PROMPT_PATH).format(current=numbered, context=product_context)


def build_description_prompt(current_description: str, product_context: str) -> str:
    return _read(DESCRIPTION_PROMPT_PATH).format(current=current_description, context=product_context)
