"""Snyk advisory schema, time conversion and version range parsing."""