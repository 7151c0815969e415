from .cli import main

# python -m covid_threat_feed
if __name__ == "__main__":
    raise SystemExit(main())
