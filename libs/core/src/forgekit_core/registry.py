"""Built-in module definitions.

These are the modules every installation offers. They are written to the
database by ``forgekit_db.seed.seed_modules``.
"""

from forgekit_core.models.module import ModuleDefinition

BUILTIN_MODULES: list[ModuleDefinition] = [
    ModuleDefinition(
        name="Product Catalog",
        slug="products",
        description="Manage your product inventory with pricing, SKUs, and stock levels",
        icon="Package",
        schema={
            "name": {"type": "string", "required": True, "label": "Product Name"},
            "description": {"type": "text", "required": False, "label": "Description"},
            "price": {"type": "number", "required": True, "label": "Price"},
            "sku": {"type": "string", "required": True, "label": "SKU"},
            "category": {"type": "string", "required": False, "label": "Category"},
            "imageUrl": {"type": "url", "required": False, "label": "Image URL"},
            "inStock": {
                "type": "boolean",
                "required": True,
                "default": True,
                "label": "In Stock",
            },
        },
    ),
    ModuleDefinition(
        name="Blog / News",
        slug="blog",
        description="Create and manage blog posts and news articles",
        icon="FileText",
        schema={
            "title": {"type": "string", "required": True, "label": "Title"},
            "content": {"type": "text", "required": True, "label": "Content"},
            "author": {"type": "string", "required": True, "label": "Author"},
            "publishedDate": {"type": "date", "required": True, "label": "Published Date"},
            "category": {"type": "string", "required": False, "label": "Category"},
            "tags": {"type": "array", "required": False, "label": "Tags"},
            "featured": {
                "type": "boolean",
                "required": False,
                "default": False,
                "label": "Featured",
            },
        },
    ),
    ModuleDefinition(
        name="Customer Database",
        slug="customers",
        description="Store and manage customer information and contacts",
        icon="Users",
        schema={
            "firstName": {"type": "string", "required": True, "label": "First Name"},
            "lastName": {"type": "string", "required": True, "label": "Last Name"},
            "email": {"type": "email", "required": True, "label": "Email"},
            "phone": {"type": "string", "required": False, "label": "Phone"},
            "company": {"type": "string", "required": False, "label": "Company"},
            "address": {"type": "text", "required": False, "label": "Address"},
            "notes": {"type": "text", "required": False, "label": "Notes"},
        },
    ),
    ModuleDefinition(
        name="Orders / Services",
        slug="orders",
        description="Track orders, services, and transactions",
        icon="ShoppingCart",
        schema={
            "orderNumber": {"type": "string", "required": True, "label": "Order Number"},
            "customerName": {"type": "string", "required": True, "label": "Customer Name"},
            "items": {"type": "array", "required": True, "label": "Items"},
            "totalAmount": {"type": "number", "required": True, "label": "Total Amount"},
            "status": {
                "type": "select",
                "required": True,
                "options": ["pending", "processing", "completed", "cancelled"],
                "default": "pending",
                "label": "Status",
            },
            "orderDate": {"type": "date", "required": True, "label": "Order Date"},
        },
    ),
]


def get_builtin_module(slug: str) -> ModuleDefinition | None:
    """Look up a built-in module definition by slug."""
    for definition in BUILTIN_MODULES:
        if definition.slug == slug:
            return definition
    return None
