"""User profile persistence and target application."""

import logging
import threading
from dataclasses import dataclass, field

from pydantic import TypeAdapter

from calorie_tracker.domain.profile import UserProfile
from calorie_tracker.services.storage import JsonBlob, KeyValueStore, StorageError

PROFILE_KEY = "user_profile"

_logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Owns the single user profile and keeps it persisted."""

    store: KeyValueStore
    profile: UserProfile = field(init=False)
    last_save_error: StorageError | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._blob = JsonBlob(self.store, PROFILE_KEY, TypeAdapter(UserProfile))
        self._lock = threading.RLock()
        self.profile = self._blob.load() or UserProfile()

    def save(self) -> StorageError | None:
        """Persist the current profile."""
        with self._lock:
            self.last_save_error = self._blob.save(self.profile)
            return self.last_save_error

    def update(self, **changes: object) -> UserProfile:
        """Apply field changes and persist; targets are left untouched."""
        with self._lock:
            merged = self.profile.model_dump()
            merged.update(changes)
            self.profile = UserProfile.model_validate(merged)
            self.save()
            return self.profile

    def apply_calculated_targets(self) -> UserProfile:
        """Recompute calorie and macro targets from current biometrics."""
        with self._lock:
            macros = self.profile.calculate_macros()
            self.profile.target_calories = self.profile.calculate_tdee()
            self.profile.target_protein = macros.protein
            self.profile.target_carbs = macros.carbs
            self.profile.target_fat = macros.fat
            self.save()
            _logger.info(
                "Applied targets: calories=%s protein=%s carbs=%s fat=%s",
                self.profile.target_calories,
                macros.protein,
                macros.carbs,
                macros.fat,
            )
            return self.profile

    def reset(self) -> UserProfile:
        """Replace the profile with a fresh default one."""
        with self._lock:
            self.profile = UserProfile()
            self.save()
            return self.profile
