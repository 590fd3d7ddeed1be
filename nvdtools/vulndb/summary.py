"""A summary of the data held in the vulnerability database."""

from __future__ import annotations

import csv
import logging
from contextlib import closing
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TextIO

from nvdtools.sqlutil.record import RecordType, column
from nvdtools.vulndb import debug
from nvdtools.vulndb.cve import VulnDBError
from nvdtools.vulndb.timeutil import format_time

_log = logging.getLogger(__name__)

SUMMARY_QUERY = """
(
    SELECT
        'snooze'      AS data_type,
        provider      AS provider,
        'current'     AS version,
        COUNT(cve_id) AS cves,
        NULL          AS published,
        NULL          AS modified
    FROM
        snooze
    GROUP BY
        provider
)

UNION ALL

(
    SELECT
        'custom_data'  AS data_type,
        provider       AS provider,
        'current'      AS version,
        COUNT(cve_id)  AS cves,
        MAX(published) AS published,
        MAX(modified)  AS modified
    FROM
        custom_data
    GROUP BY
        provider
)

UNION ALL

(
    SELECT
        'vendor_data'              AS data_type,
        vendor.provider            AS provider,
        vendor.version             AS version,
        COUNT(vendor_data.cve_id)  AS cves,
        MAX(vendor_data.published) AS published,
        MAX(vendor_data.modified)  AS modified
    FROM
        vendor_data
    LEFT JOIN
        vendor
    ON
        vendor.version = vendor_data.version
    WHERE
        vendor.ready = true
    GROUP BY
        vendor.provider,
        vendor.version
)

ORDER BY
    version DESC
"""


@dataclass
class SummaryRecord:
    """One row of the summary: a data type, provider and version with counts."""

    data_type: str = column("data_type", default="")
    provider: str = column("provider", default="")
    version: str = column("version", default="")
    cves: int = column("cves", default=0)
    published: datetime | str | None = column("published", default=None)
    modified: datetime | str | None = column("modified", default=None)


@dataclass
class SummaryExporter:
    """Exports a summary of the database contents."""

    db: Any

    def summary_records(self) -> list[SummaryRecord]:
        """Run the summary query and return its rows."""
        if debug.v(1):
            _log.info("running: %r", SUMMARY_QUERY)
        try:
            with closing(self.db.cursor()) as cur:
                cur.execute(SUMMARY_QUERY)
                rows = list(cur.fetchall())
        except Exception as e:
            raise VulnDBError(f"cannot query summary data: {e}") from e

        records = []
        for data_type, provider, version, cves, published, modified in rows:
            records.append(
                SummaryRecord(
                    data_type=str(data_type),
                    provider=str(provider),
                    version=str(version),
                    cves=int(cves or 0),
                    published=published,
                    modified=modified,
                )
            )
        return records

    def csv(self, stream: TextIO, header: bool) -> None:
        """Write the summary as CSV, optionally preceded by a header row."""
        records = self.summary_records()
        writer = csv.writer(stream, lineterminator="\n")
        if header:
            writer.writerow(RecordType(SummaryRecord).fields())
        for r in records:
            writer.writerow(
                [
                    r.data_type,
                    r.provider,
                    r.version,
                    str(r.cves),
                    format_time(r.published),
                    format_time(r.modified),
                ]
            )