"""Runtime wiring: env settings, logging setup and dependency construction."""

__all__: list[str] = []
