"""Practice-area wording (client label, scenario, attorney type) for a firm.

A light model call decides which practice area dominates and how its clients
are described. Without a key, on error, or on an incomplete reply, the
deliberately generic fallback is used: "potential client" is safer than a
wrong guess.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from report_qc.cache import ContentCache
from report_qc.config import LIGHT_MODEL, LIGHT_TIMEOUT, PRACTICE_CONTENT_MAX_TOKENS
from report_qc.pipeline.ai_analysis import AI_ERRORS, parse_json_reply
from report_qc.pipeline.prompts import build_practice_prompt

GENERIC_FALLBACK = {
    "primaryPracticeArea": "legal services",
    "clientLabel": {"singular": "potential client", "plural": "potential clients"},
    "emergencyScenario": "a legal situation",
    "attorneyType": "",
    "articleForAttorney": "an",
    "articleForClient": "a",
}


def _fallback() -> dict:
    content = copy.deepcopy(GENERIC_FALLBACK)
    content["source"] = "fallback"
    return content


def _is_complete(content: Any) -> bool:
    if not isinstance(content, dict):
        return False
    label = content.get("clientLabel")
    return isinstance(label, dict) and bool(label.get("singular")) and bool(content.get("emergencyScenario"))


def generate_practice_content(
    llm: Optional[Any],
    practice_areas: list[str],
    city: str,
    state: str,
    cache: Optional[ContentCache] = None,
) -> dict:
    """Return practice content for the firm, from cache, the model, or the fallback.

    Only model answers are cached; fallbacks are recomputed so a later call
    with working credentials can still succeed.
    """
    practice_list = ", ".join(practice_areas or []) or "general law"
    key = ContentCache.key(practice_list, city, state)
    if cache is not None and key in cache:
        print("  .. using cached practice content")
        return cache.get(key)

    if llm is None:
        return _fallback()

    print(f"  -> Generating practice content for: {practice_list}")
    try:
        reply = llm.complete(
            build_practice_prompt(practice_list, city, state),
            max_tokens=PRACTICE_CONTENT_MAX_TOKENS,
            timeout=LIGHT_TIMEOUT,
            model=LIGHT_MODEL,
        )
        content = parse_json_reply(reply)
    except AI_ERRORS as e:
        print(f"  Warning: practice content failed ({e}), using fallback")
        return _fallback()

    if not _is_complete(content):
        print("  Warning: practice content incomplete, using fallback")
        return _fallback()

    content.setdefault("attorneyType", "")
    content.setdefault("articleForAttorney", "a")
    content.setdefault("articleForClient", "a")
    content["source"] = "ai"
    if cache is not None:
        cache.set(key, content)
    print(f"  OK {content.get('primaryPracticeArea', '?')}: client=\"{content['clientLabel']['singular']}\"")
    return content
