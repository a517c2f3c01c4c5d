"""Built-in catalog of the canonical ticket operations.

Used when none of the extraction strategies recognise the page markup,
so the retrieval engine always has something to score against.
"""

from .base import ApiEndpoint, ApiParameter

_CURL_PREFIX = 'curl -v -u yourapikey:X -H "Content-Type: application/json"'
_TICKETS_URL = "https://domain.freshservice.com/api/v2/tickets"


def _ticket_id_param() -> ApiParameter:
    return ApiParameter(
        name="id",
        param_type="integer",
        description="Ticket ID",
        required=True,
    )


def fallback_endpoints() -> list[ApiEndpoint]:
    """Return the five ticket operations: create, get, list, update, delete."""
    return [
        ApiEndpoint(
            name="Create Ticket",
            description="Create a new ticket in Freshservice",
            method="POST",
            path="/api/v2/tickets",
            parameters=[
                ApiParameter(
                    name="subject",
                    description="Subject of the ticket",
                    required=True,
                ),
                ApiParameter(
                    name="description",
                    description="HTML content of the ticket",
                    required=True,
                ),
                ApiParameter(
                    name="email",
                    description="Email address of the requester",
                    required=True,
                ),
                ApiParameter(
                    name="priority",
                    param_type="integer",
                    description="Priority of the ticket: 1 low, 2 medium, 3 high, 4 urgent",
                    default="1",
                ),
                ApiParameter(
                    name="status",
                    param_type="integer",
                    description="Status of the ticket: 2 open, 3 pending, 4 resolved, 5 closed",
                    default="2",
                ),
            ],
            curl_example=(
                f"{_CURL_PREFIX} -d '{{\"subject\":\"Ticket Title\","
                f"\"description\":\"<h2>Ticket content</h2>\","
                f"\"email\":\"requester@example.com\",\"priority\":1,\"status\":2}}' "
                f"-X POST \"{_TICKETS_URL}\""
            ),
        ),
        ApiEndpoint(
            name="Get Ticket",
            description="Retrieve a specific ticket by ID",
            method="GET",
            path="/api/v2/tickets/{id}",
            parameters=[_ticket_id_param()],
            curl_example=f"curl -v -u yourapikey:X -X GET \"{_TICKETS_URL}/1\"",
        ),
        ApiEndpoint(
            name="List Tickets",
            description="Get a list of all tickets with optional filtering",
            method="GET",
            path="/api/v2/tickets",
            parameters=[
                ApiParameter(
                    name="page",
                    param_type="integer",
                    description="Page number for pagination",
                    default="1",
                ),
                ApiParameter(
                    name="per_page",
                    param_type="integer",
                    description="Number of records per page",
                    default="30",
                ),
            ],
            curl_example=(
                f"curl -v -u yourapikey:X -X GET \"{_TICKETS_URL}?page=1&per_page=30\""
            ),
        ),
        ApiEndpoint(
            name="Update Ticket",
            description="Modify the fields of an existing ticket",
            method="PUT",
            path="/api/v2/tickets/{id}",
            parameters=[
                _ticket_id_param(),
                ApiParameter(
                    name="priority",
                    param_type="integer",
                    description="New priority of the ticket",
                ),
                ApiParameter(
                    name="status",
                    param_type="integer",
                    description="New status of the ticket",
                ),
            ],
            curl_example=(
                f"{_CURL_PREFIX} -d '{{\"priority\":2,\"status\":3}}' "
                f"-X PUT \"{_TICKETS_URL}/1\""
            ),
        ),
        ApiEndpoint(
            name="Delete Ticket",
            description="Move a ticket to the trash by ID",
            method="DELETE",
            path="/api/v2/tickets/{id}",
            parameters=[_ticket_id_param()],
            curl_example=f"curl -v -u yourapikey:X -X DELETE \"{_TICKETS_URL}/1\"",
        ),
    ]
