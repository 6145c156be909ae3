"""Constants for license-auditor."""

# Exit codes
EXIT_SUCCESS = 0  # No violations reported as errors
EXIT_ISSUES = 1  # Violations reported as errors (emit_error)
EXIT_ERROR = 2  # Run failed due to configuration error

# Sentinel license identifier for packages without a recognized license
UNKNOWN_LICENSE = "UNKNOWN"

# Package metadata file searched for when resolving a path
METADATA_FILE_NAME = "package.json"

# Directory that holds installed dependencies
DEPENDENCY_DIRECTORY_NAME = "node_modules"

# Conventional license file names, in order of preference (matched case-insensitively)
LICENSE_FILE_NAMES = (
    "LICENSE",
    "LICENSE.md",
    "LICENSE.txt",
    "LICENCE",
    "LICENCE.md",
    "LICENCE.txt",
    "COPYING",
    "COPYING.md",
    "COPYING.txt",
)

# Bound on concurrent license file reads
MAX_CONCURRENT_READS = 10

DEFAULT_OUTPUT_FILENAME = "ThirdPartyNotices.txt"

# Legal disclaimer included in generated reports
LEGAL_DISCLAIMER = (
    "This report provides license information for informational purposes only. "
    "It does not constitute legal advice. Consult a qualified attorney for "
    "legal guidance on license compliance."
)
