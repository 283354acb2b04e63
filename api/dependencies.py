# api/dependencies.py
from typing import Callable, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from api.auth import CurrentUser, get_current_user
from core.config import Settings, get_settings
from core.content import ContentLocator
from core.legacy.demo_users import DemoUserStore
from core.sa.database import get_db
from core.sa.models import Product, ProductType
from core.sa.repositories import UserRepository
from core.services.entitlement import EntitlementGate


def get_content_locator(settings: Settings = Depends(get_settings)) -> ContentLocator:
    return ContentLocator(settings.content_root)


def get_demo_store(settings: Settings = Depends(get_settings)) -> Optional[DemoUserStore]:
    if not settings.demo_users_path:
        return None
    return DemoUserStore(settings.demo_users_path)


def get_library_key(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> str:
    """Key under which the demo users file stores this user: their email when known."""
    if user.email:
        return user.email
    account = UserRepository(db).get_by_id(user.id)
    return account.email if account else user.id


def require_content(product_type: ProductType) -> Callable:
    """
    Factory for a dependency guarding a content endpoint.

    The returned dependency reads ``product_id`` from the path, runs the
    entitlement gate for the caller and yields the resolved Product. Nothing
    is streamed unless it returns.

    Args:
        product_type: The only product type the endpoint serves

    Returns:
        FastAPI dependency returning the Product
    """

    def check_entitlement(
        product_id: str,
        user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> Product:
        return EntitlementGate(db).check(user.id, product_id, product_type)

    return check_entitlement
