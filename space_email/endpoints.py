"""Endpoint paths of the Space Email service, relative to ``base_url``."""

LOGIN = "/login.php"
LOGOUT = "/logout.php"
GET = "/lib/get.php"
VIEW = "/lib/view.php"
SEND = "/lib/send.php"
STAR = "/lib/star.php"
UNSTAR = "/lib/unstar.php"
PAGINATE_STARRED = "/lib/paginatestar.php"

SEND_SUCCESS = "wrap success"
