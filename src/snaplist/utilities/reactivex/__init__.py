"""Reactive stream operators shared by the store and the scroll coordinator."""

from snaplist.utilities.reactivex.debounce import debounce_latest  # noqa: F401
