"""Contact tools."""

from __future__ import annotations

from collections.abc import Mapping

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value
from runtime.tools.arguments import ArgumentExtractor
from runtime.tools.schema import integer_property, object_schema, string_property

DEFAULT_SEARCH_LIMIT = 20


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    return [
        get_contacts_tool(client),
        search_contacts_tool(client),
        add_contact_tool(client),
        delete_contact_tool(client),
    ]


def get_contacts_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        return await client.get_contacts()

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_contacts",
            description="Get the list of all contacts. Returns user details for each contact.",
            input_schema=object_schema({}),
        ),
        handler=handler,
    )


def search_contacts_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        query = args.required_string("query")
        limit = args.optional_int("limit")
        if limit is None:
            limit = DEFAULT_SEARCH_LIMIT
        return await client.search_contacts(query, limit=limit)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_search_contacts",
            description="Search for contacts by name or username.",
            input_schema=object_schema(
                {
                    "query": string_property("The search query string"),
                    "limit": integer_property(
                        "Maximum number of results to return (default 20)"
                    ),
                },
                required=["query"],
            ),
        ),
        handler=handler,
    )


def add_contact_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        phone = args.required_string("phone_number")
        first_name = args.required_string("first_name")
        last_name = args.optional_string("last_name") or ""
        return await client.add_contact(phone, first_name, last_name)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_add_contact",
            description="Add a new contact with phone number and name.",
            input_schema=object_schema(
                {
                    "phone_number": string_property(
                        "Phone number of the contact (international format)"
                    ),
                    "first_name": string_property("First name of the contact"),
                    "last_name": string_property("Last name of the contact (optional)"),
                },
                required=["phone_number", "first_name"],
            ),
        ),
        handler=handler,
    )


def delete_contact_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.delete_contact(args.required_int64("user_id"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_delete_contact",
            description="Remove a user from the contact list.",
            input_schema=object_schema(
                {"user_id": integer_property("The ID of the user to remove from contacts")},
                required=["user_id"],
            ),
        ),
        handler=handler,
    )
