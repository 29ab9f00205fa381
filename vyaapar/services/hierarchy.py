"""
Distribution hierarchy policy.

Maps a buyer's role to the supplier roles it may order from:
Retailer -> Distributor, Distributor -> Stockist, Stockist -> Admin/Super Admin.
Every other role can't buy, so it has no valid supplier.
"""
from typing import FrozenSet, Iterable

from vyaapar.models import UserRole

BUYER_ROLES: FrozenSet[UserRole] = frozenset({
    UserRole.RETAILER,
    UserRole.DISTRIBUTOR,
    UserRole.STOCKIST,
})

SUPPLIER_ROLES_BY_BUYER = {
    UserRole.RETAILER: frozenset({UserRole.DISTRIBUTOR}),
    UserRole.DISTRIBUTOR: frozenset({UserRole.STOCKIST}),
    UserRole.STOCKIST: frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN}),
}


def allowed_supplier_roles(buyer_role: UserRole) -> FrozenSet[UserRole]:
    """Return the supplier roles a buyer with `buyer_role` may order from."""
    return SUPPLIER_ROLES_BY_BUYER.get(buyer_role, frozenset())


def is_buyer_role(role: UserRole) -> bool:
    return role in BUYER_ROLES


def is_supplier_allowed(buyer_role: UserRole, supplier_role: UserRole) -> bool:
    return supplier_role in allowed_supplier_roles(buyer_role)


def describe_roles(roles: Iterable[UserRole]) -> str:
    """Human readable list for error messages, e.g. 'ADMIN or SUPER_ADMIN'."""
    names = sorted(role.value for role in roles)
    if not names:
        return 'none'
    return ' or '.join(names)
