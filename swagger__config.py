"""
Swagger/OpenAPI configuration for the Cafe Backend API
"""

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec",
            "route": "/apispec.json",
            "rule_filter": lambda rule: True,
            "model_filter": lambda tag: True,
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/api/docs",
}

SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Cafe Backend API",
        "description": "REST API for the cafe storefront: menu, product orders, table reservations with payments, in-app notifications and staff accounts",
        "version": "1.0.0",
    },
    "host": "",
    "schemes": ["http", "https"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": 'JWT Authorization header using the Bearer scheme. Example: "Authorization: Bearer {token}"',
        }
    },
    "security": [{"Bearer": []}],
    "tags": [
        {"name": "Authentication", "description": "Registration, login and the current user"},
        {"name": "Menu", "description": "Menu catalog"},
        {"name": "Orders", "description": "Product orders"},
        {"name": "Reservations", "description": "Table availability, bookings and payments"},
        {"name": "Notifications", "description": "In-app notifications"},
        {"name": "Admin", "description": "Staff account management"},
    ],
    "definitions": {
        "Error": {
            "type": "object",
            "properties": {
                "status": {"type": "string", "example": "error"},
                "message": {"type": "string"},
                "details": {"type": "string"},
            },
        },
        "User": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "email": {"type": "string", "format": "email"},
                "name": {"type": "string"},
                "role": {
                    "type": "string",
                    "enum": ["customer", "cashier", "admin", "super_admin"],
                },
                "status": {"type": "string", "enum": ["pending", "approved"]},
            },
        },
        "MenuItem": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string"},
                "description": {"type": "string"},
                "price": {"type": "number", "format": "float"},
                "image": {"type": "string"},
                "category": {"type": "string"},
            },
        },
        "Reservation": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "user_id": {"type": "integer"},
                "name": {"type": "string"},
                "email": {"type": "string"},
                "phone": {"type": "string"},
                "date": {"type": "string", "format": "date"},
                "time": {"type": "string", "example": "7:00 PM"},
                "guests": {"type": "integer"},
                "table_id": {"type": "integer"},
                "status": {
                    "type": "string",
                    "enum": ["pending", "confirmed", "finished", "cancelled"],
                },
                "payment_status": {
                    "type": "string",
                    "enum": ["pending", "paid", "refunded"],
                },
                "payment_amount": {"type": "number", "format": "float"},
            },
        },
        "Order": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "user_id": {"type": "integer"},
                "total": {"type": "number", "format": "float"},
                "status": {
                    "type": "string",
                    "enum": ["pending", "processing", "completed", "cancelled"],
                },
                "items": {"type": "array", "items": {"type": "object"}},
            },
        },
        "Notification": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "title": {"type": "string"},
                "message": {"type": "string"},
                "type": {"type": "string"},
                "status": {"type": "string", "enum": ["unread", "read"]},
                "created_at": {"type": "string", "format": "date-time"},
            },
        },
    },
}
