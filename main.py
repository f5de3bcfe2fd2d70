"""Main entry point for the application."""
import uvicorn
from config import settings

if __name__ == "__main__":
    print("Starting DD Post Ticker Tracker...")
    print(f"API will be available at http://{settings.api_host}:{settings.api_port}")
    print(f"Company list: {settings.company_csv_path}")
    print("\nEndpoints:")
    print("  GET  /api/posts?days=1   recent DD posts with tickers")
    print("  POST /api/resolve        resolve tickers for a title")

    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
