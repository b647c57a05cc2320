"""
Health check endpoint for service status monitoring.
"""
from fastapi import APIRouter
from datetime import datetime
from typing import Dict, Any

from pipeline_registry.services.database import db_service

router = APIRouter()


@router.get("")
async def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "store": "supabase" if db_service is not None else "memory",
    }
