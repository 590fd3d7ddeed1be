# nvdtools

Building blocks for working with vulnerability data in the NVD CVE JSON 1.0
format. The package has no runtime dependencies outside the standard library.

- `nvdtools.rpm` — parse RPM package names, compare RPM versions and labels
  the way `rpm` does, and combine fix checkers.
- `nvdtools.stats` — thread-safe counters and accumulated values, written
  out as CSV.
- `nvdtools.vulndb` — read and write NVD CVE JSON feeds (plain or gzipped),
  NVD timestamps, a verbosity level, and a summary of a vulnerability
  database.
- `nvdtools.sqlutil` — assignment lists for `UPDATE ... SET`, a mapping from
  dataclasses to table columns, and a nullable timestamp.
- `nvdtools.providers` — vendor feed support: snyk advisory loading, time
  conversion and version ranges; vFeed item loading and conversion to NVD
  CVE JSON items.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## RPM packages

```python
from nvdtools.rpm.parse import parse, Label
from nvdtools.rpm.compare import version_compare, label_compare

pkg = parse("MySQL-python-1.2.5-1.el7.src.rpm")
pkg.name       # "mysql-python"
pkg.version    # "1.2.5"
pkg.release    # "1.el7"
pkg.arch       # "" (src and noarch give an empty arch)

version_compare("1", "2")      # -1
version_compare("11", "2")     # 1
version_compare("~1", "99z")   # -1, a tilde sorts before anything
version_compare("0001", "1")   # 0

label_compare(Label("", "1.0", "1"), Label("0", "1.0", "2"))  # -1
```

A name that cannot be parsed raises `PackageParseError` (a `ValueError`).

`nvdtools.rpm.checker.Checker` is an abstract base with one method,
`check(pkg, distro, cve)`. `check_any(*checkers)` passes if any of them
passes; `check_all(*checkers)` passes if all of them pass, and is False when
given none.

## Statistics

```python
import sys
from nvdtools.stats import Stats

s = Stats()
s.increment_counter("c1")
s.increment_counter_by("c2", 3)
s.add_to_value("v", 2.3)
s.get_counter("c2")    # 3
s.write_csv(sys.stdout)
# c1,1
# c2,3
# v,2.30
```

`Stats.add_arguments(parser)` adds `--output_stats FILE` and `--log_stats`
to an `argparse` parser and binds them to the object; `Stats.write()` then
writes the CSV to stderr and/or appends it to the file.
`write_and_log_error()` logs a failure instead of raising it.
`track_time(key, start, unit)` adds the whole units (in seconds) elapsed
since a `time.monotonic()` reading. Module-level functions of the same names
act on one shared `Stats` instance.

## NVD CVE JSON feeds

```python
import sys
from nvdtools.vulndb.cve import CVEFile, CVEItem, read_nvd_cve_json

feed = read_nvd_cve_json("nvdcve-1.0-recent.json.gz")
for raw in feed["CVE_Items"]:
    item = CVEItem(raw)
    print(item.id(), item.published(), item.base_score(), item.summary())

out = CVEFile()
out.add("CVE-0000-0000", CVEItem(feed["CVE_Items"][0]).json())
out.encode_indented_json(sys.stdout, "", "\t")
```

`parse_nvd_cve_json(stream)` does the same from a binary stream. Unreadable
data raises `FeedError`, a subclass of `VulnDBError`; JSON syntax errors
report the line and column.

`nvdtools.vulndb.timeutil` parses and formats the NVD layout
`YYYY-MM-DDTHH:MMZ` with `parse_time` and `format_time`.
`nvdtools.vulndb.debug` holds a verbosity level (`set_level`, `get_level`,
`v(level)`), limited to the range of a signed byte.

`nvdtools.vulndb.summary.SummaryExporter(db)` takes a DB-API connection to a
database holding the `snooze`, `custom_data`, `vendor` and `vendor_data`
tables, and returns per-provider counts with `summary_records()` or writes
them as CSV with `csv(stream, header)`.

## SQL helpers

```python
from dataclasses import dataclass
from nvdtools.sqlutil.assign import assign
from nvdtools.sqlutil.record import RecordType, column, new_records

str(assign().literal("x=y").equal("k", "v"))   # "x=y, k=?"

@dataclass
class Row:
    k: str = column("foo", default="")
    v: int = column("bar", default=0)
    z: bool = False

RecordType(Row("hello", 42)).fields()              # ["foo", "bar", "z"]
RecordType(Row("hello", 42)).subset("foo").values()  # ["hello"]
new_records([Row("a", 1), Row("b", 2)]).values()     # ["a", 1, False, "b", 2, False]
```

`nvdtools.sqlutil.nulltime.NullTime` holds a datetime that may be NULL.

## Vendor feeds

```python
from nvdtools.providers.snyk.schema import load_advisories
from nvdtools.providers.snyk.timeconv import snyk_time_to_nvd
from nvdtools.providers.snyk.versionrange import parse_version_range

parse_version_range("< 1.12.4 || >= 2.0.0 <2.0.2")
parse_version_range("[1.9.4,2.8.10)")
snyk_time_to_nvd("2018-09-06T17:29:00Z")   # "2018-09-06T17:29Z"
```

```python
from nvdtools.providers.vfeed.client import Client
from nvdtools.providers.vfeed.convert import convert

for item in Client("path/to/vfeed").fetch_all_vulnerabilities(0):
    nvd_item = convert(item)
```

The client reads `<path>/*/CVE-*.json` in path order. `convert` raises
`ConvertError`, or `ValidationError` when the item lacks an ID, description
or configuration.

## What this package does not do

- It has no command-line tools.
- It has no general SQL statement builder (`SELECT`, `INSERT`, `REPLACE`,
  `DELETE`), and `nvdtools.vulndb` does not import, export, snooze, delete or
  trim vulnerability data: of the database operations only the summary is
  provided. It creates no schema and opens no connections.
- It does not convert RPM package names to CPE names, and has no helpers
  that parse a package and distribution and run a checker over them.
- Snyk advisories are loaded and their ranges and times parsed, but not
  converted to NVD CVE JSON items, and there is no client that downloads
  them.