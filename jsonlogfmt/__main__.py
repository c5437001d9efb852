"""
Allow running the converter as a module: python -m jsonlogfmt
"""
from jsonlogfmt.cli import main


if __name__ == '__main__':
    main()
