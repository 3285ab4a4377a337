import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request

from .config import get_settings
from .errors import InvalidWalletAddress, WalletTrackerError
from .logging_config import setup_logging
from .models import HealthResponse, WalletReportResponse, WalletResponse
from .tracker import WalletTracker

logger = logging.getLogger(__name__)

INVALID_ADDRESS_DETAIL = "Invalid Ethereum address format. Expected 42 characters starting with 0x"
FETCH_FAILED_DETAIL = "Failed to fetch wallet token data. Please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    app.state.tracker = WalletTracker.from_settings(settings)
    try:
        yield
    finally:
        await app.state.tracker.aclose()


app = FastAPI(
    title="wallet-tracker",
    description="Token balances derived from a wallet's transfer history",
    version="0.1.0",
    lifespan=lifespan,
)


def get_tracker(request: Request) -> WalletTracker:
    return request.app.state.tracker


async def _guarded(call, address: str):
    try:
        return await call(address)
    except InvalidWalletAddress:
        logger.info("Invalid Ethereum address format received: %s", address)
        raise HTTPException(status_code=400, detail=INVALID_ADDRESS_DETAIL)
    except WalletTrackerError as e:
        logger.error("Error fetching wallet data for address %s: %s", address, e)
        raise HTTPException(status_code=500, detail=FETCH_FAILED_DETAIL)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/wallet/{address}", response_model=WalletResponse)
async def wallet_tokens(address: str, tracker: WalletTracker = Depends(get_tracker)):
    return await _guarded(tracker.get_wallet_tokens, address)


@app.get("/wallet/{address}/report", response_model=WalletReportResponse)
async def wallet_report(address: str, tracker: WalletTracker = Depends(get_tracker)):
    return await _guarded(tracker.get_wallet_report, address)


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
