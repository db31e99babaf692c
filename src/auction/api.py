"""
FastAPI endpoints for the auction catalog.

Provides a REST API for registration, login sessions, listing, bidding,
watchlists, and settlement.
"""

import uuid
import logging
import threading
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from observability.metrics import setup_metrics_endpoint_fastapi

from .catalog import AuctionCatalog
from .config import AuctionConfig
from .errors import (
    AuctionClosedError,
    AuctionError,
    BidTooLowError,
    DuplicateUserError,
    IndexOutOfRangeError,
    InvalidCredentialsError,
    ItemAlreadyWatchlistedError,
)
from .user import User

logger = logging.getLogger(__name__)


# Request/Response models


class CredentialsRequest(BaseModel):
    """Username and password for registration or login"""

    username: str = Field(..., min_length=1, description="Unique username")
    password: str = Field(..., description="Plain-text password")


class RegisterResponse(BaseModel):
    """Response from registration"""

    username: str
    message: str


class SessionResponse(BaseModel):
    """Response from login"""

    token: str
    username: str


class AddItemRequest(BaseModel):
    """Request to list an item for auction"""

    name: str = Field(..., min_length=1, description="Item name")
    starting_price: Decimal = Field(..., ge=0, description="Opening price")
    reserve_price: Decimal = Field(..., ge=0, description="Minimum sale price")
    duration_minutes: int = Field(..., ge=0, description="Minutes until bidding closes")
    min_bid_increment: Decimal = Field(..., gt=0, description="Smallest bid step")


class BidRequest(BaseModel):
    """Request to place a bid"""

    amount: Decimal = Field(..., description="Bid amount")


class ItemRecord(BaseModel):
    """Active item in listings"""

    position: int
    item_id: str
    name: str
    highest_bid: Decimal
    highest_bidder: Optional[str]
    minimum_next_bid: Decimal
    end_time: datetime
    is_open: bool


class BidRecord(BaseModel):
    """Accepted bid"""

    item_id: str
    item_name: str
    bidder: str
    amount: Decimal
    placed_at: datetime


class WatchRecord(BaseModel):
    """Watched item snapshot"""

    item_name: str
    highest_bid: Decimal
    end_time: datetime


class SettlementRecord(BaseModel):
    """Settlement outcome for one item"""

    item_id: str
    item_name: str
    outcome: str
    highest_bid: Decimal
    winner: Optional[str]


class HistoryRecord(BaseModel):
    """Settled item"""

    item_id: str
    item_name: str
    final_price: Decimal
    winner: str
    end_time: datetime


def _http_error(error: AuctionError) -> HTTPException:
    """Map an auction error to an HTTP error"""
    if isinstance(error, BidTooLowError):
        return HTTPException(
            status_code=400,
            detail={"message": str(error), "minimum": str(error.minimum)},
        )
    if isinstance(error, IndexOutOfRangeError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidCredentialsError):
        return HTTPException(status_code=401, detail=str(error))
    if isinstance(error, (DuplicateUserError, AuctionClosedError, ItemAlreadyWatchlistedError)):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


def create_app(
    catalog: Optional[AuctionCatalog] = None,
    config: Optional[AuctionConfig] = None,
) -> FastAPI:
    """
    Build the API application around one catalog.

    Args:
        catalog: Catalog to serve (a fresh one if None)
        config: Configuration used when creating the catalog
    """
    config = config or AuctionConfig.from_env()
    catalog = catalog or AuctionCatalog(config)

    app = FastAPI(title="Auction Marketplace API", version="1.0.0")
    app.state.catalog = catalog

    sessions: Dict[str, User] = {}
    sessions_lock = threading.Lock()

    def current_user(x_session_token: Optional[str] = Header(None)) -> User:
        with sessions_lock:
            user = sessions.get(x_session_token) if x_session_token else None
        if user is None:
            raise HTTPException(status_code=401, detail="Login required")
        return user

    # API Endpoints

    @app.post("/users", response_model=RegisterResponse, status_code=201)
    def register_user(request: CredentialsRequest):
        """Register a new user."""
        try:
            catalog.register_user(request.username, request.password)
        except AuctionError as e:
            raise _http_error(e)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

        return RegisterResponse(
            username=request.username,
            message=f"User {request.username} registered successfully",
        )

    @app.post("/sessions", response_model=SessionResponse, status_code=201)
    def login(request: CredentialsRequest):
        """Log in and receive a session token for the X-Session-Token header."""
        try:
            user = catalog.login(request.username, request.password)
        except AuctionError as e:
            raise _http_error(e)

        token = str(uuid.uuid4())
        with sessions_lock:
            sessions[token] = user
        logger.info(f"[API] Session opened for {user.username}")
        return SessionResponse(token=token, username=user.username)

    @app.delete("/sessions/{token}")
    def logout(token: str):
        """Close a session."""
        with sessions_lock:
            user = sessions.pop(token, None)
        if user is None:
            raise HTTPException(status_code=404, detail="Unknown session")
        logger.info(f"[API] Session closed for {user.username}")
        return {"message": "Logged out successfully"}

    @app.post("/items", response_model=ItemRecord, status_code=201)
    def add_item(request: AddItemRequest, user: User = Depends(current_user)):
        """List a new item for auction."""
        try:
            item = catalog.add_item(
                request.name,
                request.starting_price,
                request.reserve_price,
                request.duration_minutes,
                request.min_bid_increment,
            )
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

        logger.info(f"[API] {user.username} listed {item.name}")
        for listing in catalog.list_active_items():
            if listing.item_id == item.item_id:
                return ItemRecord(**asdict(listing))
        raise HTTPException(status_code=500, detail="Listed item not found")

    @app.get("/items", response_model=List[ItemRecord])
    def list_items():
        """List active items with 1-based positions."""
        return [ItemRecord(**asdict(listing)) for listing in catalog.list_active_items()]

    @app.post("/items/{position}/bids", response_model=BidRecord, status_code=201)
    def place_bid(position: int, request: BidRequest, user: User = Depends(current_user)):
        """Bid on the item at a 1-based position."""
        try:
            bid = catalog.place_bid(position - 1, user, request.amount)
        except AuctionError as e:
            raise _http_error(e)

        return BidRecord(**asdict(bid))

    @app.post("/items/{position}/watch")
    def watch_item(position: int, user: User = Depends(current_user)):
        """Add the item at a 1-based position to the caller's watchlist."""
        try:
            item = catalog.watch_item(position - 1, user)
        except AuctionError as e:
            raise _http_error(e)

        return {
            "item_name": item.name,
            "message": f"{item.name} has been added to your watchlist",
        }

    @app.get("/me/bids", response_model=List[BidRecord])
    def my_bids(user: User = Depends(current_user)):
        """List the caller's most recent bid per item."""
        return [BidRecord(**asdict(bid)) for bid in user.list_bids()]

    @app.get("/me/watchlist", response_model=List[WatchRecord])
    def my_watchlist(user: User = Depends(current_user)):
        """List the caller's watchlist with live prices."""
        return [WatchRecord(**asdict(entry)) for entry in user.list_watchlist()]

    @app.post("/settlements", response_model=List[SettlementRecord])
    def declare_winners(user: User = Depends(current_user)):
        """Settle all active items."""
        results = catalog.declare_winners()
        logger.info(f"[API] {user.username} declared winners ({len(results)} items)")
        return [
            SettlementRecord(
                item_id=result.item_id,
                item_name=result.item_name,
                outcome=result.outcome.value,
                highest_bid=result.highest_bid,
                winner=result.winner,
            )
            for result in results
        ]

    @app.get("/history", response_model=List[HistoryRecord])
    def history():
        """List settled items."""
        return [HistoryRecord(**asdict(entry)) for entry in catalog.auction_history()]

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "auction-marketplace"}

    setup_metrics_endpoint_fastapi(app)

    return app


def main():
    """Serve the API with uvicorn"""
    import uvicorn

    config = AuctionConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    uvicorn.run(create_app(config=config), host=config.api_host, port=config.api_port)


if __name__ == "__main__":
    main()
