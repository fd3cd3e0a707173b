from __future__ import annotations

from typing import Tuple

from flask import Blueprint, request, jsonify, abort
from sqlalchemy import func
from sqlalchemy.orm import selectinload

from models import storage
from models.hero import Hero, Ability
from models.schemas.hero import HeroCreateSchema, HeroUpdateSchema, HeroOutSchema
from utils.decorators import jwt_required

bp = Blueprint("heroes", __name__)

create_schema = HeroCreateSchema()
update_schema = HeroUpdateSchema()
out_schema = HeroOutSchema()
out_list_schema = HeroOutSchema(many=True)

MAX_LIMIT = 100

HERO_FIELDS = ("name", "role", "portrait", "description", "health", "armor", "shields")


def parse_pagination() -> Tuple[int, int]:
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", "20"))
        page = max(page, 1)
        limit = max(1, min(limit, MAX_LIMIT))
        return page, limit
    except ValueError:
        abort(400, description="page and limit must be integers")


def get_hero_or_404(hero_id: str) -> Hero:
    hero = storage.get(Hero, hero_id)
    if not hero:
        abort(404, description=f"Hero with id {hero_id} not found")
    return hero


def build_abilities(items) -> list:
    return [Ability(**item) for item in items]


@bp.get("/heroes")
def list_heroes():
    """
    List heroes, optionally filtered by role or name
    ---
    tags: [Heroes]
    parameters:
      - in: query
        name: role
        type: string
        description: "tank, damage or support (case-insensitive)"
      - in: query
        name: name
        type: string
        description: "case-insensitive substring of the hero name"
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 20
    responses:
      200: { description: OK }
    """
    session = storage.get_session()
    page, limit = parse_pagination()

    query = session.query(Hero).options(selectinload(Hero.abilities))

    role = request.args.get("role")
    if role:
        query = query.filter(func.lower(Hero.role) == role.strip().lower())

    name = request.args.get("name")
    if name:
        query = query.filter(func.lower(Hero.name).contains(name.strip().lower(), autoescape=True))

    total = query.count()
    rows = query.order_by(Hero.name.asc()).offset((page - 1) * limit).limit(limit).all()
    return jsonify({"data": out_list_schema.dump(rows), "meta": {"page": page, "limit": limit, "total": total}})


@bp.get("/heroes/<hero_id>")
def get_hero(hero_id: str):
    """
    Get a hero by id
    ---
    tags: [Heroes]
    parameters:
      - in: path
        name: hero_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify({"data": out_schema.dump(get_hero_or_404(hero_id))})


@bp.post("/heroes")
@jwt_required()
def create_hero():
    """
    Create a hero with its abilities
    ---
    tags: [Heroes]
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, role]
          properties:
            name: { type: string, maxLength: 100 }
            role: { type: string, enum: [tank, damage, support] }
            portrait: { type: string, maxLength: 500 }
            description: { type: string, maxLength: 1000 }
            health: { type: integer, minimum: 0 }
            armor: { type: integer, minimum: 0 }
            shields: { type: integer, minimum: 0 }
            abilities:
              type: array
              items:
                type: object
                properties:
                  name: { type: string, maxLength: 100 }
                  description: { type: string, maxLength: 500 }
                  icon: { type: string, maxLength: 500 }
    responses:
      201: { description: Created }
      400: { description: Validation error }
      401: { description: Unauthorized }
    """
    data = create_schema.load(request.get_json(silent=True) or {})
    abilities = build_abilities(data.pop("abilities"))
    hero = Hero(**data)
    hero.abilities = abilities
    hero.save()
    return jsonify({"data": out_schema.dump(hero)}), 201


@bp.put("/heroes/<hero_id>")
@jwt_required()
def update_hero(hero_id: str):
    """
    Replace a hero; its abilities are replaced wholesale
    ---
    tags: [Heroes]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: hero_id
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            id: { type: string, description: "optional; must match the path" }
            name: { type: string, maxLength: 100 }
            role: { type: string, enum: [tank, damage, support] }
    responses:
      200: { description: OK }
      400: { description: Validation error or id mismatch }
      401: { description: Unauthorized }
      404: { description: Not found }
    """
    data = update_schema.load(request.get_json(silent=True) or {})
    if "id" in data and data["id"] != hero_id:
        abort(400, description="Hero id in body does not match the URL")

    hero = get_hero_or_404(hero_id)
    for field in HERO_FIELDS:
        setattr(hero, field, data.get(field))
    # delete-orphan cascade removes the previous abilities
    hero.abilities = build_abilities(data["abilities"])
    hero.save()
    return jsonify({"data": out_schema.dump(hero)})


@bp.delete("/heroes/<hero_id>")
@jwt_required()
def delete_hero(hero_id: str):
    """
    Delete a hero and its abilities
    ---
    tags: [Heroes]
    security:
      - Bearer: []
    parameters:
      - in: path
        name: hero_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      404: { description: Not found }
    """
    hero = get_hero_or_404(hero_id)
    hero.delete()
    return ("", 204)
