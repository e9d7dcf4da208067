from __future__ import annotations

import json
from typing import Sequence

DEFAULT_EXCLUDE_LIMIT = 50


def build_news_prompt(
    date: str,
    topics: Sequence[str],
    sources: Sequence[str],
    exclude_titles: Sequence[str] = (),
    *,
    exclude_limit: int = DEFAULT_EXCLUDE_LIMIT,
    language: str = "English",
) -> str:
    """Compose the grounded-search instruction for one day's news.

    Only the first ``exclude_limit`` titles are sent as the exclusion list.
    """
    excluded = list(exclude_titles)[:exclude_limit]
    exclusion_context = (
        f"EXCLUSION LIST (Do not show these stories again): {json.dumps(excluded, ensure_ascii=False)}."
        if excluded
        else ""
    )
    topics_str = ", ".join(topics)
    sources_str = ", ".join(sources)

    return (
        "You are an expert AI News Editor and Aggregator.\n"
        f"Current Date: {date}.\n\n"
        "YOUR MISSION:\n"
        f"1. SEARCH: Use Google Search to find the most significant news from {date} (or the last 24h).\n"
        "2. AGGREGATE: Look for stories that are being discussed across MULTIPLE sources. "
        "If the same story appears on several outlets and forums, combine them into ONE news item.\n"
        "3. FILTER:\n"
        "   - STRICTLY EXCLUDE: Tutorials, \"How to install\" guides, Top 10 lists, personal opinions/rants, "
        "and generic marketing fluff.\n"
        "   - FOCUS ON: Product Launches, Research Papers, Open Source Releases, Policy Changes, Major Industry Moves.\n"
        + (f"   - {exclusion_context}\n" if exclusion_context else "")
        + "4. RANK: Give each item an importance score (0-100).\n"
        "   - High Score (>80): Covered by major tech media AND discussed heavily on social media.\n"
        "   - Medium Score (50-79): Significant but niche (e.g. a specific paper or smaller library update).\n\n"
        "SEARCH SCOPE:\n"
        f"   - Topics: {topics_str}\n"
        f"   - Preferred Sources: {sources_str} (Prioritize matches from these sources, "
        "but include other reputable sources if the story is big).\n\n"
        "OUTPUT FORMAT:\n"
        "Return a strictly valid JSON array.\n"
        "You must include the SPECIFIC URLs you found for EACH item in the 'sources' array. "
        "Do NOT list generic homepages; list the specific article URL.\n"
        f"Write title, summary and reason in {language}.\n\n"
        "JSON Structure:\n"
        "[\n"
        "  {\n"
        '    "title": "Concise title",\n'
        '    "summary": "Professional summary (2-3 sentences). Mention specific metrics or names.",\n'
        '    "score": 85,\n'
        '    "tags": ["LLM", "Google"],\n'
        '    "reason": "Why this is significant (e.g. SOTA performance on a benchmark).",\n'
        '    "sources": [\n'
        '      {"title": "TechCrunch", "uri": "https://techcrunch.com/..."},\n'
        '      {"title": "Reddit Discussion", "uri": "https://reddit.com/..."}\n'
        "    ]\n"
        "  }\n"
        "]\n"
    )
