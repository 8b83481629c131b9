# novacart/api/deps.py
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from novacart.data.database import get_db
from novacart.domain.errors import AuthError
from novacart.domain.schemas import TokenPayload
from novacart.services.auth_service import AuthService
from novacart.services.cart_service import CartService
from novacart.services.catalog_service import CatalogResolver
from novacart.services.order_service import OrderService

bearer_scheme = HTTPBearer(auto_error=False)


def get_catalog(request: Request) -> CatalogResolver:
    return request.app.state.catalog


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenPayload:
    token = credentials.credentials if credentials else None
    try:
        return AuthService.authenticate(token)
    except AuthError as e:
        #same answer for missing, expired or forged tokens
        raise HTTPException(
            status_code=401,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_cart_service(
    db: Session = Depends(get_db),
    catalog: CatalogResolver = Depends(get_catalog),
) -> CartService:
    return CartService(db=db, catalog=catalog)


def get_order_service(
    db: Session = Depends(get_db),
    catalog: CatalogResolver = Depends(get_catalog),
) -> OrderService:
    return OrderService(db=db, catalog=catalog)
