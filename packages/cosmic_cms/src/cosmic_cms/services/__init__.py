from .listing import coerce_filters, content_queryset, list_content, paginate
from .pages import about_page, company_culture_page, homepage

__all__ = [
    "about_page",
    "coerce_filters",
    "company_culture_page",
    "content_queryset",
    "homepage",
    "list_content",
    "paginate",
]
