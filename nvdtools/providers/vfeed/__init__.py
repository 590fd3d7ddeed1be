"""vFeed item schema, conversion to NVD CVE JSON and a file-based client."""