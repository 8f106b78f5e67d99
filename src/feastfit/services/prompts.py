"""Natural-language prompts for the business-search chat provider."""

import json

from feastfit.domain.coach import CoachContext, RefineRequest
from feastfit.domain.recommendations import GeoContext, SearchRequest
from feastfit.services.context import compact_restaurants

LOCALE = "en_US"
# Placeholder coordinates (San Francisco) until a geocoder is wired in.
PLACEHOLDER_LATITUDE = 37.7749
PLACEHOLDER_LONGITUDE = -122.4194
MAX_PRICE_LEVEL = 4


def build_search_prompt(request: SearchRequest) -> tuple[str, GeoContext]:
    """Return the search prompt and the geo context sent with it."""
    lines = [
        "You are FeastFit, a fitness nutrition guide. Recommend nearby restaurants "
        "that are macro-friendly and work well for someone tracking calories and "
        "protein.",
        "",
        f"Target for this single {request.meal_type}: about "
        f"{_fmt(request.calories_target)} calories and at least "
        f"{_fmt(request.protein_min)}g protein.",
        f"Dietary preference: {request.diet or 'none specified'}.",
    ]
    if request.radius_meters and request.radius_meters > 0:
        lines.append(f"Stay within about {request.radius_meters} meters.")
    prices = ", ".join(
        "$" * level for level in request.price_levels if 0 < level <= MAX_PRICE_LEVEL
    )
    if prices:
        lines.append(f"Price levels: {prices}.")
    lines.extend(
        [
            "",
            "Prioritize:",
            "- higher-protein mains (grilled or lean meats, fish, tofu, legumes)",
            "- bowls, plates, or salads with a clear protein anchor",
            "- fewer deep-fried or ultra-heavy options by default",
            "",
            f'User is in the mood for: "{request.query}".',
            "",
            "For each recommended restaurant, also describe ONE specific "
            "macro-friendly dish or way to order there (for example, \"grilled "
            'chicken bowl with extra veggies, light sauce") and briefly explain why '
            "it fits the calorie/protein goal with a rough qualitative macro "
            'estimate (e.g. "roughly 550–650 kcal, 35–45g protein").',
            "",
            "Return businesses that are a good fit for this goal and craving.",
        ]
    )
    geo = GeoContext(
        locale=LOCALE,
        latitude=PLACEHOLDER_LATITUDE,
        longitude=PLACEHOLDER_LONGITUDE,
    )
    return "\n".join(lines), geo


def build_refine_prompt(request: RefineRequest) -> tuple[str, GeoContext]:
    """Return the refine prompt embedding a compact list of prior results."""
    system_context = "\n".join(
        [
            "You are FeastFit, a nutrition coach.",
            f"User is in {request.location} aiming for "
            f"~{_fmt(request.calories_target)} kcal and >= "
            f"{_fmt(request.protein_min)}g protein.",
            f"Diet: {request.diet or 'none'}.",
            f'Original search: "{request.query}".',
            "You will see a small list of restaurants with approximate macros.",
            "Briefly respond to the user's refinement, suggest adjustments, and "
            "mention 2–3 restaurants from the list as examples.",
            "Do not invent new restaurants.",
        ]
    )
    compact = json.dumps(compact_restaurants(request.restaurants), ensure_ascii=False)
    prompt = (
        f"{system_context}\n\n"
        f'User refinement: "{request.refine_message}".\n'
        f"Restaurants (compact JSON): {compact}"
    )
    return prompt, GeoContext(locale=LOCALE)


def build_coach_prompt(message: str, context: CoachContext) -> tuple[str, GeoContext]:
    """Return the coach prompt built from the last search and today's logs."""
    snapshot = context.snapshot
    calories = _fmt(snapshot.calories_target) if snapshot else None
    protein = _fmt(snapshot.protein_min) if snapshot else None
    diet = snapshot.diet if snapshot else None
    lines = [
        "You are FeastFit's Meal Coach. The user's targets are roughly "
        f"{calories or 'unknown'} kcal and at least {protein or 'unknown'}g protein "
        f"per meal, with diet preference: {diet or 'none'}.",
    ]
    if snapshot:
        compact = json.dumps(
            compact_restaurants(snapshot.restaurants), ensure_ascii=False
        )
        lines.append(
            f'Their last search was for "{snapshot.query or ""}" in '
            f"{snapshot.location or 'an unknown location'}. Below is a compact list "
            f"of the restaurants they saw: {compact}."
        )
    else:
        lines.append("No recent search data.")
    if context.today.meal_count:
        lines.append(
            f"Today they have already logged {context.today.meal_count} meal(s), "
            f"totaling about {_fmt(context.today.calories)} kcal and "
            f"{_fmt(context.today.protein)}g protein."
        )
    else:
        lines.append("No meals logged today.")
    lines.extend(
        [
            "Your job is to:",
            "- Briefly acknowledge what they asked.",
            "- Give personalized advice using the above context (logged meals, "
            "last search, targets).",
            "- Do NOT invent restaurants; only mention those in the provided list.",
            "- Keep answers concise and actionable.",
        ]
    )
    prompt = "\n".join(lines) + f'\n\nUser message: "{message}"'
    return prompt, GeoContext(locale=LOCALE)


def _fmt(value: float | None) -> str | None:
    if value is None:
        return None
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
