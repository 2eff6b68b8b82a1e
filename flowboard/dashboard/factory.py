from flowboard.config.settings import Settings
from flowboard.dashboard.sources import (
    BaseActivitySource,
    BaseSheetSource,
    DatabaseActivitySource,
    LiveSheetSource,
    MockActivitySource,
    MockSheetSource,
)
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.database.repositories.workflow_logs_repository import WorkflowLogsRepository


class DataSourceFactory:
    """Selects live or mock dashboard sources from ``data_source``."""

    SOURCES: tuple[str, ...] = ("live", "mock")

    @classmethod
    def create_sheet_source(cls, settings: Settings) -> BaseSheetSource:
        if cls._resolve(settings) == "mock":
            return MockSheetSource()
        missing = [
            name
            for name, value in (
                ("sheets_api_key", settings.sheets_api_key),
                ("sheets_sheet_id", settings.sheets_sheet_id),
            )
            if not value.strip()
        ]
        if missing:
            raise ValueError(
                f"data_source=live requires {', '.join(missing)}; "
                "set them or use data_source=mock"
            )
        return LiveSheetSource(
            api_key=settings.sheets_api_key,
            base_url=settings.sheets_base_url,
            timeout_seconds=settings.io_timeout_seconds,
        )

    @classmethod
    def create_activity_source(cls, settings: Settings) -> BaseActivitySource:
        if cls._resolve(settings) == "mock":
            return MockActivitySource()
        return DatabaseActivitySource(UploadedFilesRepository(), WorkflowLogsRepository())

    @classmethod
    def _resolve(cls, settings: Settings) -> str:
        source = settings.data_source.lower()
        if source not in cls.SOURCES:
            raise ValueError(
                f"Unknown data source '{source}'. Choose from: {list(cls.SOURCES)}"
            )
        return source
