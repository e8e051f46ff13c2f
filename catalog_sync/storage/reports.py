"""Report artifacts, one text file per run named by its timestamp."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import aiofiles
import structlog

from catalog_sync.errors import ReportWriteError

logger = structlog.get_logger(__name__)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class ReportSink:
    """Writes rendered reports into a reports directory."""

    def __init__(self, reports_dir: Union[str, Path]):
        self.reports_dir = Path(reports_dir)

    def path_for(self, timestamp: datetime) -> Path:
        return self.reports_dir / f"report_{iso_timestamp(timestamp)}.txt"

    async def write(self, text: str, timestamp: Optional[datetime] = None) -> Path:
        """Write ``text`` and return the path of the new report file."""
        path = self.path_for(timestamp or datetime.now(timezone.utc))

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as e:
            raise ReportWriteError(
                f"Cannot write report {path}: {e}", path=path, previous_error=e
            ) from e

        logger.info("Report written", file=str(path))
        return path
