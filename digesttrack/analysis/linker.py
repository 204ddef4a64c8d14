"""Temporal meal → symptom candidate links."""
from datetime import timedelta
from typing import Iterable, List

from digesttrack.analysis.time_utils import to_utc
from digesttrack.models import MealSymptomLink


def link_meals_to_symptoms(
    meals: Iterable, symptoms: Iterable, window_hours: int
) -> List[MealSymptomLink]:
    """
    Link every meal to every symptom event within [meal_time, meal_time + window].

    No de-duplication: a symptom may link to several meals and a meal to
    several symptoms. Links carry the delay in whole minutes.
    """
    window = timedelta(hours=window_hours)
    symptom_times = [(symptom, to_utc(symptom.occurred_at)) for symptom in symptoms]

    links = []
    for meal in meals:
        meal_time = to_utc(meal.meal_time)
        for symptom, occurred_at in symptom_times:
            delay = occurred_at - meal_time
            if timedelta(0) <= delay <= window:
                links.append(
                    MealSymptomLink(
                        user_id=meal.user_id,
                        window_hours=window_hours,
                        meal_id=meal.id,
                        symptom_id=symptom.id,
                        time_diff=int(delay.total_seconds() // 60),
                    )
                )
    return links
