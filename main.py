"""Brand traffic analysis tool - Entry point."""

from dotenv import load_dotenv

from brand_traffic_analysis.cli import app

# Load environment variables (BRAND_TERMS, BRAND_CUSTOM_PATTERN) from .env file
load_dotenv()

if __name__ == "__main__":
    app()
