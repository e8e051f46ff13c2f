"""One sync run: load both documents, reconcile, save, report."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog

from catalog_sync.config.settings import Settings
from catalog_sync.localization import Reconciler, Report, build_reconciler, render_report
from catalog_sync.storage import DocumentStore, FileDocumentStore, ReportSink
from catalog_sync.translation import TranslationProvider, Translator

logger = structlog.get_logger(__name__)


@dataclass
class SyncResult:
    """Outcome of a completed run."""

    report: Report
    report_text: str
    report_path: Path


class CatalogSync:
    """Runs reconciliation between two named documents of a store.

    Storage errors abort the run before anything else is written. Translation
    failures never abort it, they show up as fallback entries in the report.
    """

    def __init__(
        self,
        store: DocumentStore,
        reconciler: Reconciler,
        sink: ReportSink,
        source_name: str,
        target_name: str,
    ):
        self.store = store
        self.reconciler = reconciler
        self.sink = sink
        self.source_name = source_name
        self.target_name = target_name

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider: Optional[TranslationProvider] = None,
    ) -> "CatalogSync":
        """Wire the default file store, translator and report sink."""
        translator = Translator.from_settings(settings, provider=provider)
        return cls(
            store=FileDocumentStore(settings.documents_dir, settings.document_format),
            reconciler=build_reconciler(translator, settings.fallback_prefix),
            sink=ReportSink(settings.reports_dir),
            source_name=settings.source_document,
            target_name=settings.target_document,
        )

    async def run(self) -> SyncResult:
        logger.info("Starting sync", source=self.source_name, target=self.target_name)

        source = await self.store.load(self.source_name)
        target = await self.store.load(self.target_name)

        report = await self.reconciler.reconcile(source, target)

        await self.store.save(self.target_name, target)

        report_text = render_report(report)
        report_path = await self.sink.write(report_text)

        logger.info(
            "Sync complete",
            target=self.target_name,
            updated=report.updated_count,
            report=str(report_path),
        )
        return SyncResult(report=report, report_text=report_text, report_path=report_path)
