EXTENSIONS_HELP_TEXT = (
    "File extensions to consider, comma or space separated (e.g. .zip,.avi,.mp4).\n"
    "Default: all files"
)

COMPARE_HASH_HELP_TEXT = (
    "Compare file content with an xxHash64 fingerprint before reporting.\n"
    "Without it, files are matched by name only and the interactive mode\n"
    "offers on-demand hashing per duplicate set"
)

INTERACTIVE_HELP_TEXT = (
    "Review duplicate sets one by one and choose which file to delete.\n"
    "Nothing is removed before the final confirmation"
)

EPILOG_TEXT = """
Examples:
  Find files with the same name in two directories
  %(prog)s ~/Photos /mnt/backup/Photos

  Also verify that matching files have identical content
  %(prog)s ~/Photos /mnt/backup/Photos --compare-hash

  Compare three directories, only videos larger than 10MB, top level only
  %(prog)s dir1 dir2 dir3 -e .mp4,.avi -m 10MB -L 0

  Review duplicates interactively and move the chosen files to trash
  %(prog)s ~/Photos /mnt/backup/Photos -H -i --trash
"""
