from core.imports import Blueprint, jsonify, request
from core.errors import ApiError, NotFound
from services.catalog import CATEGORIES, SORT_OPTIONS, SORT_RATING, FilterManager, product_manager

marketplace_bp = Blueprint('marketplace', __name__)


@marketplace_bp.route('/api/products', methods=['GET'])
def list_products():
    """
    List catalog products
    ---
    tags:
      - Marketplace
    parameters:
      - name: category
        in: query
        type: string
        enum: [all, potatoes, vegetables, fruits, berries, herbs, eggs, meat]
      - name: sort
        in: query
        type: string
        enum: [rating, price-asc, price-desc, newest]
      - name: q
        in: query
        type: string
        description: Case-insensitive search in product names
    responses:
      200:
        description: Filtered and sorted products
        schema:
          type: object
          properties:
            products:
              type: array
              items:
                type: object
            count:
              type: integer
              example: 9
      400:
        description: Unknown category or sort option
    """
    category = request.args.get("category", "all")
    sort = request.args.get("sort", SORT_RATING)
    query = request.args.get("q", "").strip()

    if category not in CATEGORIES:
        raise ApiError(f"Unknown category '{category}'")
    if sort not in SORT_OPTIONS:
        raise ApiError(f"Unknown sort option '{sort}'")

    products = product_manager.search(query) if query else product_manager.get_all()

    filters = FilterManager(products)
    filters.set_category(category)
    filters.set_sort(sort)
    product_list = filters.apply()

    return jsonify({
        "products": product_list,
        "count": len(product_list)
    }), 200


@marketplace_bp.route('/api/products/<int:product_id>', methods=['GET'])
def product_details(product_id):
    product = product_manager.get_by_id(product_id)
    if not product:
        raise NotFound("Product not found")
    return jsonify(product), 200
