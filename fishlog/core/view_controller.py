from __future__ import annotations
from typing import Optional, Tuple

from fishlog.utils.errors import ValidationError
from fishlog.utils.typing import AuthState, CATCH_VIEWS, DASHBOARD_VIEWS, Preferences

VARIANTS = {
    "dashboard": DASHBOARD_VIEWS,
    "catches": CATCH_VIEWS,
}


class ViewController:
    """Active view for one dashboard, seeded from ``displaySettings.defaultCatchView``.

    The selection follows the preference only when the preference itself
    changes; navigating with ``select`` sticks until then.
    """

    def __init__(self, variant: str = "dashboard", preferences: Optional[Preferences] = None):
        if variant not in VARIANTS:
            raise ValueError(f"Unknown view variant: {variant}")
        self.variant = variant
        self.views: Tuple[str, ...] = VARIANTS[variant]
        self.current = self.views[0]
        self._seed: Optional[str] = None
        self.sync(preferences)

    @property
    def fallback(self) -> str:
        return self.views[0]

    def sync(self, preferences: Optional[Preferences]) -> str:
        preferred = preferences.display_settings.default_catch_view if preferences else None
        if preferred is not None and preferred != self._seed:
            self._seed = preferred
            self.current = preferred if preferred in self.views else self.fallback
        return self.current

    def on_state(self, state: AuthState) -> None:
        self.sync(state.preferences)

    def select(self, view: str) -> str:
        if view not in self.views:
            raise ValidationError(f"Unknown view '{view}'. Choose one of: {', '.join(self.views)}")
        self.current = view
        return view
