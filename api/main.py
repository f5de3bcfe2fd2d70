"""FastAPI backend for DD Post Ticker Tracker."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import settings
from services.sheet_posts import PostSourceError, SheetPostService
from utils.company_directory import Directory, DirectoryLoadError, load_directory_from_csv
from utils.company_matcher import TickerResolver, combine_tickers


class ResolveRequest(BaseModel):
    title: str


class ResolveResponse(BaseModel):
    title: str
    tickers: List[str]
    explicit: List[str]
    inferred: Optional[str] = None


def load_company_directory() -> Directory:
    """Load the company list, falling back to an empty directory."""
    try:
        directory = load_directory_from_csv(settings.company_csv_path)
    except DirectoryLoadError as e:
        print(f"Warning: {e}. Name-based ticker inference will be disabled.")
        return Directory()
    print(f"Loaded {len(directory)} companies from {settings.company_csv_path}")
    return directory


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the company directory once and build shared services."""
    print("Starting DD Post Ticker Tracker API...")
    app.state.resolver = TickerResolver(load_company_directory())
    app.state.post_service = SheetPostService()
    yield


app = FastAPI(title="DD Post Ticker Tracker API", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_resolver(request: Request) -> TickerResolver:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        # Startup has not run (e.g. app used without lifespan)
        resolver = TickerResolver(Directory())
    return resolver


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "DD Post Ticker Tracker API", "version": "1.0.0"}


@app.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "companies": len(get_resolver(request).directory),
    }


@app.post("/api/resolve", response_model=ResolveResponse)
async def resolve_title(body: ResolveRequest, request: Request):
    """Resolve tickers for a single title."""
    resolver = get_resolver(request)
    explicit = resolver.explicit(body.title)
    inferred = resolver.infer(body.title)
    return ResolveResponse(
        title=body.title,
        tickers=combine_tickers(explicit, inferred),
        explicit=explicit,
        inferred=inferred,
    )


@app.get("/api/posts")
def get_recent_posts(request: Request, days: int = Query(settings.default_days_back, ge=1)):
    """Get recent DD posts with their tickers, newest first."""
    post_service = getattr(request.app.state, "post_service", None) or SheetPostService()

    try:
        posts = post_service.fetch_resolved_posts(get_resolver(request), days_back=days)
    except PostSourceError as e:
        print(f"Error in get_recent_posts: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return {"days": days, "count": len(posts), "posts": posts}


@app.get("/api/companies/{symbol}")
async def get_company(symbol: str, request: Request):
    """Look up a company in the directory by symbol."""
    record = get_resolver(request).directory.find(symbol.upper())
    if record is None:
        raise HTTPException(status_code=404, detail=f"Unknown symbol {symbol.upper()}")
    return {"symbol": record.symbol, "name": record.name}
