from tourism_app.client.api_client import ClientError, TourismClient, retrieve_and_sanitize_text
from tourism_app.client.table import TextTable, render_table
