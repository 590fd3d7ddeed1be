"""RPM package name parsing, version comparison and fix checkers."""