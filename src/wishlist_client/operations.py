"""GraphQL documents used by the client."""

USER_FIELDS = "id email name createdAt updatedAt"
CATEGORY_FIELDS = "id name color createdAt updatedAt userId"
LINK_FIELDS = "id url description itemId isPrimary createdAt updatedAt"
ITEM_FIELDS = (
    "id title description categoryId favicon createdAt updatedAt userId "
    f"links {{ {LINK_FIELDS} }}"
)
PAGINATION_FIELDS = "totalItems page pageSize totalPages hasNext hasPrevious"
BATCH_FIELDS = "success processedCount failedCount errors"

ME_QUERY = f"query Me {{ me {{ {USER_FIELDS} }} }}"

WISHLIST_QUERY = f"""
query Wishlist($filter: WishlistFilterInput, $pagination: PaginationInput) {{
  wishlist(filter: $filter, pagination: $pagination) {{
    categories {{ {CATEGORY_FIELDS} }}
    items {{ {ITEM_FIELDS} }}
    pagination {{ {PAGINATION_FIELDS} }}
  }}
}}
"""

CATEGORIES_QUERY = f"query Categories {{ categories {{ {CATEGORY_FIELDS} }} }}"

ITEM_QUERY = f"query Item($id: ID!) {{ item(id: $id) {{ {ITEM_FIELDS} }} }}"

REGISTER_MUTATION = f"""
mutation Register($input: RegisterInput!) {{
  register(input: $input) {{ success error user {{ {USER_FIELDS} }} }}
}}
"""

LOGIN_MUTATION = f"""
mutation Login($input: LoginInput!) {{
  login(input: $input) {{ success error user {{ {USER_FIELDS} }} }}
}}
"""

LOGOUT_MUTATION = "mutation Logout { logout }"

CREATE_CATEGORY_MUTATION = f"""
mutation CreateCategory($input: CategoryInput!) {{
  createCategory(input: $input) {{ {CATEGORY_FIELDS} }}
}}
"""

UPDATE_CATEGORY_MUTATION = f"""
mutation UpdateCategory($id: ID!, $input: CategoryUpdateInput!) {{
  updateCategory(id: $id, input: $input) {{ {CATEGORY_FIELDS} }}
}}
"""

DELETE_CATEGORY_MUTATION = "mutation DeleteCategory($id: ID!) { deleteCategory(id: $id) }"

CREATE_ITEM_MUTATION = f"""
mutation CreateItem($input: ItemInput!) {{
  createItem(input: $input) {{ {ITEM_FIELDS} }}
}}
"""

UPDATE_ITEM_MUTATION = f"""
mutation UpdateItem($id: ID!, $input: ItemUpdateInput!) {{
  updateItem(id: $id, input: $input) {{ {ITEM_FIELDS} }}
}}
"""

DELETE_ITEM_MUTATION = "mutation DeleteItem($id: ID!) { deleteItem(id: $id) }"

ADD_ITEM_LINK_MUTATION = f"""
mutation AddItemLink($itemId: ID!, $input: ItemLinkInput!) {{
  addItemLink(itemId: $itemId, input: $input) {{ {LINK_FIELDS} }}
}}
"""

UPDATE_ITEM_LINK_MUTATION = f"""
mutation UpdateItemLink($id: ID!, $input: ItemLinkUpdateInput!) {{
  updateItemLink(id: $id, input: $input) {{ {LINK_FIELDS} }}
}}
"""

DELETE_ITEM_LINK_MUTATION = "mutation DeleteItemLink($id: ID!) { deleteItemLink(id: $id) }"

SET_PRIMARY_LINK_MUTATION = """
mutation SetPrimaryLink($itemId: ID!, $linkId: ID!) {
  setPrimaryLink(itemId: $itemId, linkId: $linkId)
}
"""

BATCH_DELETE_ITEMS_MUTATION = f"""
mutation BatchDeleteItems($input: BatchDeleteInput!) {{
  batchDeleteItems(input: $input) {{ {BATCH_FIELDS} }}
}}
"""

BATCH_MOVE_ITEMS_MUTATION = f"""
mutation BatchMoveItems($input: BatchMoveInput!) {{
  batchMoveItems(input: $input) {{ {BATCH_FIELDS} }}
}}
"""
