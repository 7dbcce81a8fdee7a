from snaplist.utilities.env.scroll import ScrollConfiguration
from snaplist.utilities.env.window import WindowConfiguration


class Configuration(
    WindowConfiguration,
    ScrollConfiguration,
):
    """Aggregate environment configuration helpers."""
