import logging

from django.contrib import messages
from django.core.exceptions import ImproperlyConfigured
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET

from .forms import StkPushForm
from .mpesa.stk_push import get_driver, lipa_na_mpesa_stk_push

logger = logging.getLogger(__name__)


def stk_push(request):
    """
    Collect phone and amount, then hand the STK push to the driver.
    The outcome is not known here, the page polls stk_push_status for it.
    """
    if request.method == "POST":
        form = StkPushForm(request.POST)
        if form.is_valid():
            try:
                stk_push_request = lipa_na_mpesa_stk_push(
                    phone=form.cleaned_data["phone"],
                    amount=form.cleaned_data["amount"],
                )
            except ImproperlyConfigured as e:
                logger.error("M-Pesa is not configured: %s", e)
                messages.error(request, "M-Pesa payments are not configured.")
            else:
                messages.success(
                    request,
                    f"Payment request for {stk_push_request.amount} sent to {stk_push_request.phone_number}.",
                )
            return redirect("stk_push")
    else:
        form = StkPushForm()

    return render(request, "daraja/stk_push.html", {"form": form})


@require_GET
def stk_push_status(request):
    try:
        driver = get_driver()
    except ImproperlyConfigured as e:
        logger.error("M-Pesa is not configured: %s", e)
        return JsonResponse({"error": "M-Pesa payments are not configured"}, status=503)
    return JsonResponse(driver.daraja_state.value.to_dict())
