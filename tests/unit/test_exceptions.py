"""
Unit tests for the error taxonomy.
"""

from vyaapar.exceptions import (
    EmptyCartError, InvalidRoleError, MissingBuyerError, NotFoundError,
    OrderNumberExhaustedError, PreconditionFailedError
)
from vyaapar.models import UserRole


def test_not_found_to_dict():
    error = NotFoundError('Product not found')
    assert error.status_code == 404
    assert error.to_dict() == {'status': 'error', 'message': 'Product not found'}


def test_invalid_role_lists_expected_roles():
    error = InvalidRoleError('Invalid supplier', expected_roles={UserRole.SUPER_ADMIN, UserRole.ADMIN})
    assert error.status_code == 400
    assert error.to_dict()['expected_roles'] == ['ADMIN', 'SUPER_ADMIN']


def test_checkout_preconditions_are_precondition_failures():
    for error in (EmptyCartError(), MissingBuyerError()):
        assert isinstance(error, PreconditionFailedError)
        assert error.status_code == 400
    assert EmptyCartError().to_dict()['code'] == 'EMPTY_CART'
    assert MissingBuyerError().to_dict()['code'] == 'MISSING_BUYER'


def test_order_number_exhausted_is_conflict():
    error = OrderNumberExhaustedError(3)
    assert error.status_code == 409
    assert error.attempts == 3
    assert error.to_dict()['code'] == 'ORDER_NUMBER_EXHAUSTED'
    assert '3 attempts' in error.message
