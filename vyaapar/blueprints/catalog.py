"""Catalog blueprint - product listing and admin product maintenance."""
from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError

from vyaapar.database import get_session
from vyaapar.decorators.permissions import admin_only
from vyaapar.exceptions import ConflictError, NotFoundError, BusinessLogicError
from vyaapar.middleware import require_login
from vyaapar.models import Product
from vyaapar.utils import formatters
from vyaapar.utils.request_parsing import json_body, required_str, parse_price

catalog_bp = Blueprint('catalog', __name__, url_prefix='/products')


@catalog_bp.route('', methods=['GET'])
@require_login
def list_products():
    """Active products, by name."""
    products = get_session().query(Product).filter(
        Product.active.is_(True)
    ).order_by(Product.name).all()
    return jsonify({'status': 'success', 'data': [formatters.product_detail(p) for p in products]})


@catalog_bp.route('', methods=['POST'])
@require_login
@admin_only
def create_product():
    payload = json_body()
    product = Product(
        name=required_str(payload, 'name'),
        sku=required_str(payload, 'sku'),
        price=parse_price(payload.get('price')),
        unit=required_str(payload, 'unit') if payload.get('unit') is not None else 'pcs',
        active=True
    )

    db_session = get_session()
    try:
        db_session.add(product)
        db_session.commit()
    except IntegrityError:
        db_session.rollback()
        raise ConflictError('A product with this SKU already exists')

    return jsonify({'status': 'success', 'data': formatters.product_detail(product)}), 201


@catalog_bp.route('/<product_id>', methods=['PATCH'])
@require_login
@admin_only
def update_product(product_id):
    """Update name, sku, price, unit or active. Cart snapshots keep their old price."""
    payload = json_body()
    db_session = get_session()

    product = db_session.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError('Product not found')

    if 'name' in payload:
        product.name = required_str(payload, 'name')
    if 'sku' in payload:
        product.sku = required_str(payload, 'sku')
    if 'price' in payload:
        product.price = parse_price(payload['price'])
    if 'unit' in payload:
        product.unit = required_str(payload, 'unit')
    if 'active' in payload:
        if not isinstance(payload['active'], bool):
            raise BusinessLogicError('active must be a boolean')
        product.active = payload['active']

    try:
        db_session.commit()
    except IntegrityError:
        db_session.rollback()
        raise ConflictError('A product with this SKU already exists')

    return jsonify({'status': 'success', 'data': formatters.product_detail(product)})
