from django.views.decorators.csrf import csrf_exempt

from .donors import my_donations
from .hospitals import create_donation


@csrf_exempt
def donations(request):
    """``/api/donations``: hospitals POST new donations, donors GET their own.

    The two methods need different authenticators, so each is its own DRF
    view and this only routes by method.
    """
    if request.method == 'POST':
        return create_donation(request)
    return my_donations(request)
