from django.contrib import messages

NORMAL = "normal"
DESTRUCTIVE = "destructive"


def notify(request, title: str, description: str, destructive: bool = False) -> None:
    """Queue a toast for the next rendered page; never raises."""
    level = messages.ERROR if destructive else messages.SUCCESS
    messages.add_message(
        request,
        level,
        f"{title}: {description}",
        extra_tags=DESTRUCTIVE if destructive else NORMAL,
        fail_silently=True,
    )
