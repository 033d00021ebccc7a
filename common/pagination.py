from rest_framework.pagination import PageNumberPagination


class AdminPagination(PageNumberPagination):
    """Default pagination for back-office lists with an adjustable page size."""

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
