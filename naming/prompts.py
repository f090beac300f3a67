import json
from typing import Iterable

from naming.models import BrandEssence


STRATEGIST_PROMPT = """
You are a world-class brand strategist. Your task is to read a short request
and distil it into a "Brand Essence" document.
Move beyond literal descriptions of the product and find the emotional core
of the brand.

USER REQUEST:
- Industry: "{industry}"
- Keywords: "{keywords}"
- Tone: "{tone}"

Create a JSON object containing:
1. "brandStory": A short, evocative narrative (2-3 sentences).
2. "coreMetaphors": An array of exactly 3 abstract, powerful metaphors.
3. "namingTerritories": An array of exactly 3 distinct, creative territories to explore.

Return ONLY the JSON object.
""".strip()


AVOIDANCE = """
IMPORTANT: In the previous attempt many of the domains were taken.
Avoid names that sound like any of these: {names}.
Be more creative and unconventional.
""".strip()


CREATOR_PROMPT = """
You are a creative linguist who invents brand names like 'Stripe', 'Notion'
and 'Figma'. You are allergic to generic tech-speak.
Based on the Brand Essence below, generate a diverse list of {n} unique,
invented brand names.

CRITICAL RULE: Avoid obvious, clunky tech portmanteaus like 'CogniVex',
'IntelliData' or 'VirtuFlow'. Aim for subtlety, phonetic beauty and emotional
resonance rather than a literal description.
{avoidance}

BRAND ESSENCE:
{essence}

Return ONLY a newline separated list of the {n} names.
Do not number them or add any other text.
""".strip()


CRITIC_PROMPT = """
You are the most discerning naming critic in the world. Filter the list of
names below with extreme prejudice.

FILTERING CRITERIA:
1. Immediate disqualification: anything that sounds like generic
   machine-made word salad ('Cogni', 'Intelli', 'Virtu', 'Vex', 'Xara', etc.).
2. Brand essence alignment: does the name feel like it fits the story and
   the metaphors?
3. Phonetic appeal and timelessness: is it easy to say, will it still sound
   good in ten years?

Select ONLY the top {n} strongest names. For each, give a sharp, insightful
"rationale".

BRAND ESSENCE:
{essence}

NAMES TO EVALUATE:
{names}

Return a valid JSON object in exactly this format:
{{"topNames": [{{"name": "Auraq", "rationale": "..."}}]}}
""".strip()


def essence_json(essence: BrandEssence) -> str:
    return json.dumps(essence.to_dict(), indent=2)


def strategist_prompt(industry: str, keywords: str, tone: str) -> str:
    return STRATEGIST_PROMPT.format(industry=industry, keywords=keywords, tone=tone)


def creator_prompt(
    essence: BrandEssence,
    *,
    avoid: Iterable[str] = (),
    n: int = 25,
) -> str:
    avoid = list(avoid)
    avoidance = AVOIDANCE.format(names=", ".join(avoid)) if avoid else ""
    return CREATOR_PROMPT.format(
        n=n,
        avoidance=avoidance,
        essence=essence_json(essence),
    )


def critic_prompt(names: Iterable[str], essence: BrandEssence, *, n: int = 10) -> str:
    return CRITIC_PROMPT.format(
        n=n,
        essence=essence_json(essence),
        names="\n".join(names),
    )
