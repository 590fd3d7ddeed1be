"""NVD CVE JSON feeds, timestamps, verbosity and a database summary exporter."""