"""Merge missing source leaves into a target translation document."""

from typing import Optional

import structlog

from catalog_sync.errors import CatalogSyncError
from catalog_sync.translation.translator import Translator

from .document import LeafNode, MappingNode, join_path
from .report import Report

logger = structlog.get_logger(__name__)

DEFAULT_FALLBACK_PREFIX = "HE "


class Reconciler:
    """Fills keys the target document lacks with translated source values.

    Existing target values are never overwritten. When a translation cannot
    be obtained the target gets ``fallback_prefix + source text`` so a human
    can find and fix it later.
    """

    def __init__(self, translator: Translator, fallback_prefix: str = DEFAULT_FALLBACK_PREFIX):
        self.translator = translator
        self.fallback_prefix = fallback_prefix

    async def reconcile(self, source: MappingNode, target: MappingNode) -> Report:
        """Walk ``source`` and add every missing leaf to ``target`` in place.

        Args:
            source: Reference document, left untouched
            target: Document to complete

        Returns:
            Report of the added leaves, in source order
        """
        report = Report()
        await self._reconcile_node(source, target, report, "")

        logger.info(
            "Reconciliation finished",
            updated=report.updated_count,
            translated=report.translated_count,
            fallbacks=report.fallback_count,
            conflicts=len(report.conflicts),
        )
        logger.debug("Reconciliation report", **report.to_dict())
        return report

    async def _reconcile_node(
        self,
        source: MappingNode,
        target: MappingNode,
        report: Report,
        prefix: str,
    ) -> None:
        for key, source_child in source.items():
            path = join_path(prefix, key)

            match source_child:
                case MappingNode():
                    target_child = self._ensure_mapping(target, key, path, report)
                    await self._reconcile_node(source_child, target_child, report, path)

                case LeafNode():
                    if key in target:
                        continue
                    target[key] = await self._fill_leaf(source_child, path, report)

    def _ensure_mapping(
        self,
        target: MappingNode,
        key: str,
        path: str,
        report: Report,
    ) -> MappingNode:
        match target.children.get(key):
            case MappingNode() as existing:
                return existing
            case LeafNode() as existing:
                # Completeness needs a mapping here; keep the old value in the report.
                logger.warning(
                    "Replacing target value with a mapping",
                    path=path,
                    discarded=existing.text,
                )
                report.add_conflict(path, existing.text)

        created = MappingNode()
        target[key] = created
        return created

    async def _fill_leaf(self, source_leaf: LeafNode, path: str, report: Report) -> LeafNode:
        text = source_leaf.text
        try:
            translation = await self.translator.translate(text)
        except CatalogSyncError as e:
            logger.warning(
                "Using fallback marker",
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            report.add_fallback(path, text)
            return LeafNode(f"{self.fallback_prefix}{text}")

        report.add_translation(path, text, translation)
        return LeafNode(translation)


def build_reconciler(translator: Translator, fallback_prefix: Optional[str] = None) -> Reconciler:
    """Create a reconciler, deriving the fallback marker from the target language."""
    if fallback_prefix is None:
        fallback_prefix = f"{translator.target_language.upper()} "
    return Reconciler(translator, fallback_prefix=fallback_prefix)
