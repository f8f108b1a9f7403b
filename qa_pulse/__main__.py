"""Allow running as ``python -m qa_pulse``."""

from qa_pulse.run import main

if __name__ == "__main__":
    main()
