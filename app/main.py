import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from utils.config import settings

# Import routes
from routes import availability, menu_management, seasonal_menus, stock, order_management

# Import database, models and error handlers
import models  # noqa: F401  registers every table on Base.metadata
from utils.database import engine, Base
from utils.exceptions import register_exception_handlers

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title="Menu Availability API",
    description="Shared restaurant catalog with seasonal menus and per-branch stock",
    version="1.0.0",
    openapi_tags=[
        {"name": "availability", "description": "Resolved item list for a branch, role and instant"},
        {"name": "menu_management", "description": "Catalog item management"},
        {"name": "seasonal-menus", "description": "Seasonal menu management"},
        {"name": "stock", "description": "Per-branch stock"},
        {"name": "orders", "description": "Customer orders"}
    ]
)


# Configure CORS and error handlers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


# Include routers
app.include_router(availability.router)
app.include_router(menu_management.router)
app.include_router(seasonal_menus.router)
app.include_router(stock.router)
app.include_router(order_management.router)

# Root endpoint
@app.get("/")
async def root():
    return {"message": "Welcome to the Menu Availability API"}

# Main run block
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
