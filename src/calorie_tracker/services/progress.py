"""Progress views comparing logged intake with profile targets."""

from dataclasses import dataclass

from calorie_tracker.domain.logs import DailyLog, WeightEntry
from calorie_tracker.domain.profile import UserProfile
from calorie_tracker.domain.stats import DailyProgress, PeriodSummary, WeightProgress
from calorie_tracker.services.daily_logs import DailyLogService
from calorie_tracker.services.profiles import ProfileService
from calorie_tracker.services.weights import WeightLogService

SUPPORTED_WINDOWS = (7, 14, 30)


@dataclass
class ProgressService:
    """Computes averages and remaining budgets for progress screens."""

    daily_logs: DailyLogService
    profiles: ProfileService
    weights: WeightLogService

    def period(self, days: int) -> PeriodSummary:
        """Return logs and averages for the last ``days`` calendar days."""
        logs = self.daily_logs.logs_for_last_days(days)
        return summarize(days, logs, self.profiles.profile.target_calories)

    def today(self) -> DailyProgress:
        """Return today's consumption against the profile targets."""
        log = self.daily_logs.today_log()
        profile = self.profiles.profile
        return DailyProgress(
            consumed_calories=log.total_calories,
            calories_left=calories_left(profile, log),
            calorie_progress=calorie_progress(profile, log),
            protein=log.total_protein,
            carbs=log.total_carbs,
            fat=log.total_fat,
            streak=self.daily_logs.current_streak(),
        )

    def weight(self, days: int) -> WeightProgress:
        """Return weight progress over the last ``days`` calendar days."""
        entries = self.weights.entries_for_last_days(days)
        return weight_progress(self.profiles.profile, entries)


def summarize(days: int, logs: list[DailyLog], target_calories: int) -> PeriodSummary:
    """Average per-log totals; every average is 0 for an empty window."""
    if not logs:
        return PeriodSummary(
            days=days,
            logs=[],
            avg_calories=0,
            avg_protein=0.0,
            avg_carbs=0.0,
            avg_fat=0.0,
            calorie_target_diff=-target_calories,
        )
    count = len(logs)
    avg_calories = sum(log.total_calories for log in logs) // count
    return PeriodSummary(
        days=days,
        logs=logs,
        avg_calories=avg_calories,
        avg_protein=sum(log.total_protein for log in logs) / count,
        avg_carbs=sum(log.total_carbs for log in logs) / count,
        avg_fat=sum(log.total_fat for log in logs) / count,
        calorie_target_diff=avg_calories - target_calories,
    )


def calories_left(profile: UserProfile, log: DailyLog) -> int:
    """Return the unspent calorie budget for a day, never negative."""
    return max(0, profile.target_calories - log.total_calories)


def calorie_progress(profile: UserProfile, log: DailyLog) -> float:
    """Return the consumed share of the calorie target, capped at 1."""
    if profile.target_calories <= 0:
        return 0.0
    return min(log.total_calories / profile.target_calories, 1.0)


def weight_progress(
    profile: UserProfile, entries: list[WeightEntry]
) -> WeightProgress:
    """Return how far the logged weights have moved toward the desired weight."""
    start = entries[0].weight_kg if entries else profile.weight_kg
    current = entries[-1].weight_kg if entries else profile.weight_kg
    desired = profile.desired_weight_kg
    total_change = start - desired
    if total_change == 0:
        progress = 1.0 if current == desired else 0.0
    else:
        progress = (start - current) / total_change
    return WeightProgress(
        start_kg=start,
        current_kg=current,
        desired_kg=desired,
        progress=min(max(progress, 0.0), 1.0),
    )
