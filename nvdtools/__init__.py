"""Tools for RPM versions, NVD CVE JSON feeds, SQL record helpers and vendor feeds."""

__version__ = "0.1.0"