"""brolog: summarize Bro/Zeek network-security logs."""

from brolog.cli import main

if __name__ == "__main__":
    main()
