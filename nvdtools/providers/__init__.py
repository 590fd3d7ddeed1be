"""Vendor vulnerability feed support: snyk and vFeed."""