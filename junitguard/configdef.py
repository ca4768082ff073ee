"""junitguard default configuration file

Every configuration element ever used in the program must exist here.
These defaults may be overridden in the user's config file or with --set.
"""


# Sort the .xml files found in a directory by name before ingesting them.
# Directory listing order depends on the filesystem, so set this for reproducible output.
sort_paths = False

# Output format of junitguard-ingest: 'text' or 'json'
report_format = 'text'

# Show the failing, erroring and skipped tests in text output
show_tests = False

# Seconds to wait for a server when downloading a report
http_timeout = 60

# Number of times to retry a failed download
http_retries = 4

# Retry delay factor; this delays a total of 2+4+8+16 seconds with the defaults
http_backoff_factor = 2
