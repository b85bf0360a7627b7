"""Settings override for tests."""

from dishka import Provider, Scope, provide

from qna.config import Settings


class StaticSettingsProvider(Provider):
    """Provides a fixed Settings instance instead of reading the environment."""

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide the test settings."""
        return self._settings
