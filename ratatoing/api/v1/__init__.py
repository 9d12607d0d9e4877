"""API v1 routes."""

from fastapi import APIRouter

from ratatoing.api.v1 import approvals, auth, bank, emails, health, jobs, shop, tasks

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(approvals.router, prefix="/approvals", tags=["approvals"])
router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(tasks.payouts_router, prefix="/payouts", tags=["payouts"])
router.include_router(bank.router, prefix="/bank", tags=["bank"])
router.include_router(shop.router, prefix="/shop", tags=["shop"])
router.include_router(shop.inventory_router, prefix="/inventory", tags=["shop"])
router.include_router(emails.router, prefix="/emails", tags=["emails"])
