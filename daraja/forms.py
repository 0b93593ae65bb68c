# daraja/forms.py
from django import forms


class StkPushForm(forms.Form):
    # Free text on purpose, the gateway is the one validating both fields
    phone = forms.CharField(
        max_length=20,
        initial="0710102720",
        widget=forms.TextInput(attrs={"placeholder": "Enter phone number"}),
    )
    amount = forms.CharField(
        max_length=12,
        initial="1",
        widget=forms.TextInput(attrs={"placeholder": "Enter amount"}),
    )
