# app/handlers.py
from .pipeline import Reply, RequestContext
from .query import category_stats, list_products
from .result import Err, Ok, Result

# This file contains the core logic for all product endpoints.
# Each function runs after authentication (and validation, for writes).


def list_products_logic(ctx: RequestContext) -> Result[Reply]:
    page = list_products(
        ctx.store.list(),
        category=ctx.query.get("category"),
        search=ctx.query.get("search"),
        page=ctx.query.get("page"),
        limit=ctx.query.get("limit"),
    )
    return Ok(Reply(200, page))


def get_product_logic(ctx: RequestContext) -> Result[Reply]:
    found = ctx.store.get(ctx.path_params["product_id"])
    if isinstance(found, Err):
        return found
    return Ok(Reply(200, found.value.to_dict()))


def create_product_logic(ctx: RequestContext) -> Result[Reply]:
    product = ctx.store.insert(ctx.payload)
    return Ok(Reply(201, product.to_dict()))


def update_product_logic(ctx: RequestContext) -> Result[Reply]:
    updated = ctx.store.update(ctx.path_params["product_id"], ctx.payload)
    if isinstance(updated, Err):
        return updated
    return Ok(Reply(200, updated.value.to_dict()))


def delete_product_logic(ctx: RequestContext) -> Result[Reply]:
    deleted = ctx.store.delete(ctx.path_params["product_id"])
    if isinstance(deleted, Err):
        return deleted
    return Ok(Reply(200, {"message": "Product deleted", "product": deleted.value.to_dict()}))


def product_stats_logic(ctx: RequestContext) -> Result[Reply]:
    return Ok(Reply(200, category_stats(ctx.store.list())))
