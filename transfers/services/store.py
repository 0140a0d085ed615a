from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from accounts import profiles
from accounts.policy import Operation, enforce
from accounts.profiles import Caller
from analytics.services import EventRecorder
from core.constants import Country, default_payment_method, is_payment_method_allowed, source_currency
from core.exceptions import NotFoundError, ValidationError
from currency.conversion import Amount, convert
from currency.services import RateTable
from transfers.models import Transaction
from .lifecycle import INITIAL_STAGE, INITIAL_STATUS, LifecycleResult, TransactionLifecycleService

logger = logging.getLogger(__name__)


class TransactionStore:
    """Creation and retrieval of transfers, with access rules applied."""

    def __init__(
        self,
        *,
        rate_table: Optional[RateTable] = None,
        lifecycle: Optional[TransactionLifecycleService] = None,
        event_recorder: Optional[EventRecorder] = None,
        profile_lookup=None,
    ):
        self.events = event_recorder or EventRecorder()
        self.rates = rate_table or RateTable(event_recorder=self.events)
        self.lifecycle = lifecycle or TransactionLifecycleService(event_recorder=self.events)
        self._profile_lookup = profile_lookup or profiles.get_profiles

    def create(
        self,
        *,
        caller: Optional[Caller],
        owner_id=None,
        source_amount: Amount,
        recipient_name: str,
        recipient_mobile: str,
        country: str,
        payment_method: Optional[str] = None,
    ) -> Transaction:
        if owner_id is None and caller is not None:
            owner_id = caller.user_id
        enforce(caller, Operation.CREATE_TRANSACTION, owner_id)

        recipient_name = (recipient_name or "").strip()
        recipient_mobile = (recipient_mobile or "").strip()
        if not recipient_name:
            raise ValidationError("Recipient name is required.")
        if not recipient_mobile:
            raise ValidationError("Recipient mobile number is required.")
        if country not in Country.values:
            raise NotFoundError(f"No active rate for country {country!r}.")
        payment_method = payment_method or default_payment_method(country)
        if not is_payment_method_allowed(country, payment_method):
            raise ValidationError(f"Payment method {payment_method!r} is not available for {country}.")

        with transaction.atomic():
            # The rate read here is copied onto the transaction; later rate
            # updates never touch it.
            rate = self.rates.get_active_rate(country)
            conversion = convert(source_amount, rate)
            if not conversion.is_ready:
                raise conversion.error
            if conversion.source_amount != conversion.source_amount.quantize(Decimal("0.01")):
                raise ValidationError("Amount must have at most two decimal places.")

            tx = Transaction.objects.create(
                owner_id=owner_id,
                source_amount=conversion.source_amount,
                destination_amount=conversion.destination_amount,
                exchange_rate=conversion.exchange_rate,
                fee_percentage=conversion.fee_percentage,
                fee=conversion.fee,
                total_charge=conversion.total_charge,
                recipient_name=recipient_name,
                recipient_mobile=recipient_mobile,
                country=country,
                payment_method=payment_method,
                status=INITIAL_STATUS,
                stage=INITIAL_STAGE,
            )

            self.events.record(
                "transaction.created",
                resource_type="transaction",
                resource_id=tx.pk,
                actor=caller,
                payload={
                    "country": country,
                    "source_amount": str(tx.source_amount),
                    "destination_amount": str(tx.destination_amount),
                    "rate_version": rate.version,
                },
            )

        logger.info(
            "Transaction %s created by user=%s: %s %s -> %s %s (%s)",
            tx.pk,
            owner_id,
            tx.source_amount,
            source_currency(),
            tx.destination_amount,
            tx.destination_currency,
            country,
        )
        return tx

    def get(self, transaction_id, *, caller: Optional[Caller]) -> Transaction:
        enforce(caller, Operation.READ_TRANSACTION)
        try:
            tx = Transaction.objects.get(pk=transaction_id)
        except (Transaction.DoesNotExist, DjangoValidationError):
            raise NotFoundError(f"Transaction {transaction_id} not found.")
        enforce(caller, Operation.READ_TRANSACTION, tx)
        if caller.is_admin:
            self._attach_owner(tx)
        return tx

    def list_by_owner(self, owner_id, *, caller: Optional[Caller]) -> List[Transaction]:
        enforce(caller, Operation.READ_OWN_TRANSACTIONS, owner_id)
        return list(Transaction.objects.filter(owner_id=owner_id).order_by("-created_at"))

    def list_all(
        self,
        *,
        caller: Optional[Caller],
        status: Optional[str] = None,
        stage: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List[Transaction]:
        """
        Every transaction, newest first, each carrying ``owner_profile``
        (None when the profile lookup fails or the owner has no profile).
        """
        enforce(caller, Operation.READ_ALL_TRANSACTIONS)

        queryset = Transaction.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        if stage:
            queryset = queryset.filter(stage=stage)
        if country:
            queryset = queryset.filter(country=country)
        transactions = list(queryset.order_by("-created_at"))

        owners = self._owner_profiles({tx.owner_id for tx in transactions})
        for tx in transactions:
            tx.owner_profile = owners.get(tx.owner_id)
        return transactions

    def update(
        self,
        transaction_id,
        *,
        caller: Optional[Caller],
        status: Optional[str] = None,
        stage: Optional[str] = None,
    ) -> LifecycleResult:
        result = self.lifecycle.set_state(transaction_id, caller=caller, status=status, stage=stage)
        self._attach_owner(result.transaction)
        return result

    def _attach_owner(self, tx: Transaction) -> None:
        tx.owner_profile = self._owner_profiles({tx.owner_id}).get(tx.owner_id)

    def _owner_profiles(self, owner_ids) -> dict:
        try:
            return self._profile_lookup(owner_ids)
        except Exception:
            # Best effort: the listing still renders with bare owner ids.
            logger.warning("Owner profile lookup failed for %s owners", len(owner_ids), exc_info=True)
            return {}
