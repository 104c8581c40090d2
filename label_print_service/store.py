"""
Label Store
===========

Record store for label configurations, generated labels and print history.

Records are kept in memory and, when a data directory is given, persisted as
JSON files (``configs.json``, ``labels.json``, ``history.json``).
"""

import json
import logging
import math
import os
from collections import OrderedDict
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Dict, Any, List, Iterable

from .models import (
    LabelConfig, GeneratedLabel, PrintHistory,
    ConnectionType, PrintStatus, LabelStatus,
)

logger = logging.getLogger(__name__)


def paginate(items: List[Any], page: int = 1, limit: int = 10) -> Dict[str, Any]:
    """Slice a list into one page plus paging metadata."""
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    start = (page - 1) * limit
    return {
        'items': items[start:start + limit],
        'total': len(items),
        'total_pages': math.ceil(len(items) / limit),
        'current_page': page,
    }


def _in_range(when: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start and when < start:
        return False
    if end and when > end:
        return False
    return True


class LabelStore:
    """In-memory record store with optional JSON persistence."""

    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize store.

        Args:
            data_dir: Directory for JSON files (None keeps records in memory only)
        """
        self.data_dir = Path(data_dir) if data_dir else None
        self._configs: Dict[str, LabelConfig] = {}
        # Keyed by code, insertion ordered
        self._labels: Dict[str, GeneratedLabel] = OrderedDict()
        self._history: Dict[str, PrintHistory] = {}

    # =========================================================================
    # Persistence
    # =========================================================================

    def _get_data_file(self, name: str) -> Path:
        """Get path to data file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / f'{name}.json'

    def _read(self, name: str) -> List[Dict[str, Any]]:
        path = self._get_data_file(name)
        if not path.exists():
            return []
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _write(self, name: str, records: Iterable[Any]):
        if not self.data_dir:
            return
        # Serialise before touching the file so a bad record cannot truncate it
        payload = json.dumps([r.to_dict() for r in records], indent=2)
        path = self._get_data_file(name)
        tmp_path = path.with_suffix('.json.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(payload)
        os.replace(tmp_path, path)

    def load(self):
        """Load all records from the data directory."""
        if not self.data_dir:
            return
        try:
            self._configs = {c['id']: LabelConfig.from_dict(c) for c in self._read('configs')}
            self._labels = OrderedDict(
                (l['code'], GeneratedLabel.from_dict(l)) for l in self._read('labels')
            )
            self._history = {h['id']: PrintHistory.from_dict(h) for h in self._read('history')}
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Failed to load records from %s: %s", self.data_dir, e)
            return
        logger.info(
            "Loaded %d config(s), %d label(s), %d print record(s)",
            len(self._configs), len(self._labels), len(self._history),
        )

    def _save_configs(self):
        self._write('configs', self._configs.values())

    def _save_labels(self):
        self._write('labels', self._labels.values())

    def _save_history(self):
        self._write('history', self._history.values())

    # =========================================================================
    # Label Configurations
    # =========================================================================

    def add_config(self, config: LabelConfig) -> LabelConfig:
        config.validate()
        self._configs[config.id] = config
        self._save_configs()
        logger.info("Created config %s (%s x%d)", config.id, config.base_name, config.quantity)
        return config

    def get_config(self, config_id: str) -> Optional[LabelConfig]:
        return self._configs.get(config_id)

    def update_config(self, config_id: str, **fields) -> Optional[LabelConfig]:
        """
        Update name, quantity, code_type or is_template of a configuration.

        Raises:
            ValueError: if the updated configuration is invalid
        """
        config = self._configs.get(config_id)
        if not config:
            return None

        changes = {
            key: fields[key] for key in ['name', 'quantity', 'code_type', 'is_template']
            if fields.get(key) is not None
        }
        config = replace(config, **changes)
        config.validate()
        config.touch()

        self._configs[config_id] = config
        self._save_configs()
        return config

    def delete_config(self, config_id: str) -> bool:
        if config_id not in self._configs:
            return False
        del self._configs[config_id]
        self._save_configs()
        return True

    def list_configs(self, is_template: Optional[bool] = None,
                     page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """List configurations, most recently used first."""
        configs = list(self._configs.values())
        if is_template is not None:
            configs = [c for c in configs if c.is_template == is_template]
        configs.sort(key=lambda c: c.last_used, reverse=True)
        return paginate(configs, page, limit)

    def recent_configs(self, limit: int = 5) -> List[LabelConfig]:
        configs = sorted(self._configs.values(), key=lambda c: c.last_used, reverse=True)
        return configs[:limit]

    def generate(self, config_id: str, save: bool = False) -> Optional[List[str]]:
        """
        Generate the codes of a configuration.

        Args:
            config_id: Configuration ID
            save: Also store one GeneratedLabel per code

        Returns:
            Codes in sequence order, or None if the configuration is unknown
        """
        config = self._configs.get(config_id)
        if not config:
            return None

        codes = config.generate_codes()
        if save:
            self.save_generated(config, codes)

        config.touch()
        self._save_configs()
        return codes

    # =========================================================================
    # Generated Labels
    # =========================================================================

    def save_generated(self, config: LabelConfig, codes: List[str]) -> List[GeneratedLabel]:
        """
        Store generated codes; codes that already exist are skipped.

        Returns:
            Newly created labels
        """
        created = []
        for index, code in enumerate(codes):
            if code in self._labels:
                continue
            label = GeneratedLabel(
                code=code,
                code_type=config.code_type,
                config_id=config.id,
                base_name=config.base_name,
                sequence_number=config.start_number + index,
                status=LabelStatus.GENERATED.value,
            )
            self._labels[code] = label
            created.append(label)

        skipped = len(codes) - len(created)
        if skipped:
            logger.info("Skipped %d existing code(s) for %s", skipped, config.base_name)
        self._save_labels()
        return created

    def find_label(self, code: str) -> Optional[GeneratedLabel]:
        return self._labels.get(code)

    def code_exists(self, code: str) -> bool:
        return code in self._labels

    def labels_by_base_name(self, base_name: str, limit: int = 100) -> List[GeneratedLabel]:
        labels = [l for l in self._labels.values() if l.base_name == base_name]
        labels.sort(key=lambda l: l.sequence_number)
        return labels[:limit]

    def export_labels(self, base_name: Optional[str] = None,
                      start: Optional[datetime] = None,
                      end: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Export labels sorted by base name and sequence number."""
        labels = [
            l for l in self._labels.values()
            if (not base_name or l.base_name == base_name)
            and _in_range(l.created_at, start, end)
        ]
        labels.sort(key=lambda l: (l.base_name, l.sequence_number))
        return [
            {
                'code': l.code,
                'code_type': l.code_type,
                'base_name': l.base_name,
                'sequence_number': l.sequence_number,
                'is_printed': l.is_printed,
                'printed_at': l.printed_at.isoformat() if l.printed_at else None,
            }
            for l in labels
        ]

    # =========================================================================
    # Print History
    # =========================================================================

    def record_print(self, history: PrintHistory) -> PrintHistory:
        """
        Store a print record; on success mark its codes as printed.

        Raises:
            ValueError: if the record is invalid
        """
        history.validate()
        self._history[history.id] = history
        try:
            self._save_history()
        except Exception:
            del self._history[history.id]
            raise

        if history.status == PrintStatus.SUCCESS.value and history.generated_codes:
            marked = 0
            for code in history.generated_codes:
                label = self._labels.get(code)
                if label:
                    label.mark_as_printed(history.id)
                    marked += 1
            if marked:
                self._save_labels()
            logger.info("Marked %d label(s) printed for %s", marked, history.id)

        return history

    def get_history(self, history_id: str) -> Optional[PrintHistory]:
        return self._history.get(history_id)

    def list_history(self, status: Optional[str] = None,
                     connection_type: Optional[str] = None,
                     base_name: Optional[str] = None,
                     start: Optional[datetime] = None,
                     end: Optional[datetime] = None,
                     page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """List print history, newest first."""
        records = [
            h for h in self._history.values()
            if (not status or h.status == status)
            and (not connection_type or h.connection_type == connection_type)
            and (not base_name or base_name.lower() in h.base_name.lower())
            and _in_range(h.created_at, start, end)
        ]
        records.sort(key=lambda h: h.created_at, reverse=True)
        return paginate(records, page, limit)

    def delete_history(self, history_id: str) -> bool:
        if history_id not in self._history:
            return False
        del self._history[history_id]
        self._save_history()
        return True

    def bulk_delete_history(self, ids: Optional[List[str]] = None,
                            older_than: Optional[datetime] = None) -> int:
        """
        Delete print records by ID, or every record older than a date.

        Raises:
            ValueError: if neither ids nor older_than is given
        """
        if ids:
            doomed = [i for i in ids if i in self._history]
        elif older_than:
            doomed = [h.id for h in self._history.values() if h.created_at < older_than]
        else:
            raise ValueError('Please provide either ids or older_than')

        for history_id in doomed:
            del self._history[history_id]
        if doomed:
            self._save_history()
        return len(doomed)

    def prune_history(self, days: int) -> int:
        """Delete print records older than ``days`` days."""
        return self.bulk_delete_history(older_than=datetime.now() - timedelta(days=days))

    # =========================================================================
    # Statistics
    # =========================================================================

    def statistics(self, start: Optional[datetime] = None,
                   end: Optional[datetime] = None) -> Dict[str, Any]:
        """Summary of print activity between two dates."""
        records = [h for h in self._history.values() if _in_range(h.created_at, start, end)]
        total = len(records)
        successful = sum(1 for h in records if h.status == PrintStatus.SUCCESS.value)

        stats = {
            'total_prints': total,
            'total_labels': sum(h.quantity for h in records),
            'successful_prints': successful,
            'failed_prints': sum(1 for h in records if h.status == PrintStatus.FAILED.value),
            'success_rate': round(successful / total * 100, 2) if total else 0,
            'avg_duration': sum(h.duration for h in records) / total if total else 0,
        }
        for connection in ConnectionType:
            stats[f'{connection.value}_prints'] = sum(
                1 for h in records if h.connection_type == connection.value
            )
        return stats

    def daily_statistics(self, days: int = 7) -> List[Dict[str, Any]]:
        """Per-day print counts for the last ``days`` days, oldest first."""
        since = datetime.now() - timedelta(days=days)
        buckets: Dict[str, Dict[str, Any]] = {}

        for h in self._history.values():
            if h.created_at < since:
                continue
            day = h.created_at.strftime('%Y-%m-%d')
            bucket = buckets.setdefault(day, {
                'date': day,
                'total_prints': 0,
                'total_labels': 0,
                'successful_prints': 0,
                'failed_prints': 0,
            })
            bucket['total_prints'] += 1
            bucket['total_labels'] += h.quantity
            if h.status == PrintStatus.SUCCESS.value:
                bucket['successful_prints'] += 1
            elif h.status == PrintStatus.FAILED.value:
                bucket['failed_prints'] += 1

        return [buckets[day] for day in sorted(buckets)]

    def top_labels(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Base names with the most labels printed."""
        groups: Dict[str, Dict[str, Any]] = {}
        for h in self._history.values():
            group = groups.setdefault(h.base_name, {
                'base_name': h.base_name,
                'total_prints': 0,
                'total_quantity': 0,
                'last_printed': h.created_at,
            })
            group['total_prints'] += 1
            group['total_quantity'] += h.quantity
            group['last_printed'] = max(group['last_printed'], h.created_at)

        top = sorted(groups.values(), key=lambda g: g['total_quantity'], reverse=True)[:limit]
        for group in top:
            group['last_printed'] = group['last_printed'].isoformat()
        return top

    def counts(self) -> Dict[str, int]:
        return {
            'total_labels': len(self._labels),
            'total_print_jobs': len(self._history),
            'total_configs': len(self._configs),
        }
