import sys

from plumage_batch.presentation.cli import main

if __name__ == '__main__':
    sys.exit(main())
