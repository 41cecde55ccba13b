"""
Email Templates

Pure rendering of the four storefront emails. Every template returns an
``EmailMessage`` with subject, HTML body and plain-text body; the booking
related ones embed the ticket QR code.
"""

from datetime import datetime
from decimal import Decimal
from html import escape
from typing import Any, Mapping

import attrs
from pydantic import ValidationError

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import DomainError
from src.service.ticketing.app.dto.email_context import (
    EMAIL_CONTEXT_BY_TEMPLATE,
    BookingEmailContext,
    CancellationEmailContext,
    ReminderEmailContext,
    WelcomeEmailContext,
)
from src.service.ticketing.domain.enum.notification_type import EmailTemplate, ReminderType
from src.service.ticketing.domain.value_object.email_message import EmailMessage
from src.service.ticketing.domain.value_object.ticket_qr import (
    build_ticket_qr_payload,
    qr_image_url,
)


REMINDER_TIME_TEXT = {
    ReminderType.DAY_BEFORE: 'tomorrow',
    ReminderType.HOUR_BEFORE: 'in 1 hour',
}
REMINDER_ACCENT_COLOR = {
    ReminderType.DAY_BEFORE: '#9f7aea',
    ReminderType.HOUR_BEFORE: '#f56565',
}


def format_long_date(moment: datetime) -> str:
    return f'{moment:%A, %B} {moment.day}, {moment.year}'


def format_short_date(moment: datetime) -> str:
    return f'{moment.month}/{moment.day}/{moment.year}'


def format_money(amount: Decimal) -> str:
    return f'${amount:.2f}'


def _plural_seats(count: int) -> str:
    return f'{count} seat{"s" if count > 1 else ""}'


@attrs.define(frozen=True)
class MailIdentity:
    brand: str
    support_address: str
    bookings_sender: str
    reminders_sender: str
    cancellations_sender: str
    welcome_sender: str

    @classmethod
    def from_settings(cls, settings: Settings) -> 'MailIdentity':
        return cls(
            brand=settings.MAIL_BRAND,
            support_address=settings.MAIL_SUPPORT_ADDRESS,
            bookings_sender=settings.MAIL_BOOKINGS_SENDER,
            reminders_sender=settings.MAIL_REMINDERS_SENDER,
            cancellations_sender=settings.MAIL_CANCELLATIONS_SENDER,
            welcome_sender=settings.MAIL_WELCOME_SENDER,
        )


class EmailTemplateRenderer:
    def __init__(self, *, identity: MailIdentity) -> None:
        self.identity = identity

    def render(self, *, template: EmailTemplate, payload: Mapping[str, Any]) -> EmailMessage:
        """
        Validate an outbox payload against its template context and render it

        Raises:
            DomainError: the payload does not match the template context
        """
        context_model = EMAIL_CONTEXT_BY_TEMPLATE[template]
        try:
            context: Any = context_model.model_validate(dict(payload))
        except ValidationError as e:
            raise DomainError(
                f'Invalid {template.value} email payload: {e.error_count()} errors'
            ) from e

        if template == EmailTemplate.BOOKING_CONFIRMATION:
            return self.booking_confirmation(context)
        if template == EmailTemplate.EVENT_REMINDER:
            return self.event_reminder(context)
        if template == EmailTemplate.BOOKING_CANCELLATION:
            return self.booking_cancellation(context)
        return self.welcome(context)

    def booking_confirmation(self, context: BookingEmailContext) -> EmailMessage:
        brand = self.identity.brand
        qr_url = self._qr_url(context)
        title = escape(context.event_title)

        html = self._layout(
            header_color='#3182ce',
            icon='🎫',
            heading='Booking Confirmed!',
            tagline='Your tickets are ready',
            body=f"""
            <h2 style="color: #1a365d;">{title}</h2>
            <p><strong>Date:</strong> {format_long_date(context.event_date)}</p>
            <p><strong>Time:</strong> {escape(context.event_time)}</p>
            <p><strong>Venue:</strong> {escape(context.venue_name)}</p>
            <p><strong>Seats:</strong> {_plural_seats(context.seat_count)}</p>
            <p><strong>Booking Reference:</strong> <code>{escape(context.reference)}</code></p>
            <p><strong>Total Amount:</strong> {format_money(context.total_amount)}</p>
            <div style="text-align: center;">
              <h3>📱 Digital Ticket</h3>
              <img src="{escape(qr_url)}" alt="Ticket QR Code">
              <p>Present this QR code at the venue entrance</p>
            </div>
            <ul>
              <li>Please arrive at least 30 minutes before the event starts</li>
              <li>Bring a valid ID that matches the booking name</li>
              <li>Screenshots of the QR code are acceptable</li>
            </ul>""",
            footer=f'Thank you for choosing {escape(brand)}! 🎉',
        )
        text = '\n'.join(
            [
                f'BOOKING CONFIRMATION - {brand}',
                '================================',
                '',
                '🎫 Your booking is confirmed!',
                '',
                'EVENT DETAILS:',
                f'Event: {context.event_title}',
                f'Date: {format_long_date(context.event_date)}',
                f'Time: {context.event_time}',
                f'Venue: {context.venue_name}',
                f'Seats: {_plural_seats(context.seat_count)}',
                '',
                'BOOKING SUMMARY:',
                f'Booking Reference: {context.reference}',
                f'Customer: {context.customer_name}',
                f'Email: {context.customer_email}',
                f'Total Amount: {format_money(context.total_amount)}',
                'Payment Status: Confirmed',
                '',
                'IMPORTANT REMINDERS:',
                '• Arrive at least 30 minutes before the event starts',
                '• Bring a valid ID that matches the booking name',
                '• Present your QR code at the venue entrance',
                '• Screenshots of the QR code are acceptable',
                f'• Contact {self.identity.support_address} for any assistance',
                '',
                f'Thank you for choosing {brand}!',
            ]
        )
        return EmailMessage(
            to=context.customer_email,
            sender=self.identity.bookings_sender,
            reply_to=self.identity.support_address,
            subject=f'🎫 Booking Confirmed - {context.event_title} | Ref: {context.reference}',
            html=html,
            text=text,
        )

    def event_reminder(self, context: ReminderEmailContext) -> EmailMessage:
        time_text = REMINDER_TIME_TEXT[context.reminder_type]
        qr_url = self._qr_url(context)

        html = self._layout(
            header_color=REMINDER_ACCENT_COLOR[context.reminder_type],
            icon='⏰',
            heading='Event Reminder',
            tagline=f'Your event is {time_text}!',
            body=f"""
            <h2 style="color: #1a365d;">{escape(context.event_title)}</h2>
            <p>📅 {format_short_date(context.event_date)} at {escape(context.event_time)}</p>
            <p>📍 {escape(context.venue_name)}</p>
            <p><strong>Booking Reference:</strong> <code>{escape(context.reference)}</code></p>
            <p><strong>Seats:</strong> {_plural_seats(context.seat_count)}</p>
            <div style="text-align: center;">
              <img src="{escape(qr_url)}" alt="Ticket QR Code">
            </div>
            <p><strong>Don't forget your ticket and ID!</strong></p>""",
            footer=f'See you there! {escape(self.identity.brand)}',
        )
        text = (
            f'Event Reminder: {context.event_title} is {time_text} at {context.event_time} '
            f"at {context.venue_name}. Don't forget your ticket and ID!"
        )
        return EmailMessage(
            to=context.customer_email,
            sender=self.identity.reminders_sender,
            reply_to=self.identity.support_address,
            subject=(
                f'⏰ Reminder: {context.event_title} is {time_text}! | Ref: {context.reference}'
            ),
            html=html,
            text=text,
        )

    def booking_cancellation(self, context: CancellationEmailContext) -> EmailMessage:
        html = self._layout(
            header_color='#e53e3e',
            icon='❌',
            heading='Booking Cancelled',
            tagline='Your refund is being processed',
            body=f"""
            <h3>{escape(context.event_title)}</h3>
            <p>📅 {format_short_date(context.event_date)} at {escape(context.event_time)}<br>
               📍 {escape(context.venue_name)}</p>
            <h4>💰 Refund Details</h4>
            <p><strong>Original Amount:</strong> {format_money(context.total_amount)}</p>
            <p><strong>Cancellation Fee:</strong> {format_money(context.cancellation_fee)}</p>
            <p><strong>Refund Amount:</strong> {format_money(context.refund_amount)}</p>
            <p><strong>⏱️ Processing Time:</strong> Your refund will be processed within
               3-5 business days and will appear on your original payment method.</p>
            <p><strong>Booking Reference:</strong> <code>{escape(context.reference)}</code></p>""",
            footer='We hope to serve you again soon',
        )
        text = (
            f'Booking Cancelled: {context.event_title}. '
            f'Refund of {format_money(context.refund_amount)} will be processed within '
            f'3-5 business days. Booking Reference: {context.reference}'
        )
        return EmailMessage(
            to=context.customer_email,
            sender=self.identity.cancellations_sender,
            reply_to=self.identity.support_address,
            subject=(
                f'❌ Booking Cancelled - {context.event_title} | Refund Processing '
                f'| Ref: {context.reference}'
            ),
            html=html,
            text=text,
        )

    def welcome(self, context: WelcomeEmailContext) -> EmailMessage:
        brand = self.identity.brand
        html = self._layout(
            header_color='#667eea',
            icon='🎉',
            heading=f'Welcome to {escape(brand)}!',
            tagline='Your gateway to amazing experiences',
            body=f"""
            <h2>Hi {escape(context.user_name)}! 👋</h2>
            <p>Thank you for joining {escape(brand)}! We're excited to help you discover and
               book amazing events, from blockbuster movies to live concerts and sporting
               events.</p>
            <ul>
              <li>Browse events by category or search for specific shows</li>
              <li>Select your preferred seats with our interactive seat map</li>
              <li>Receive digital tickets with QR codes via email</li>
              <li>Present your QR code at the venue for easy entry</li>
            </ul>""",
            footer=f'Welcome to the {escape(brand)} family! 🎉',
        )
        text = (
            f'Welcome to {brand}, {context.user_name}! Discover amazing events and book '
            f'tickets with ease. Browse movies, concerts, sports, and theater events. '
            f'Get started today!'
        )
        return EmailMessage(
            to=context.user_email,
            sender=self.identity.welcome_sender,
            reply_to=self.identity.support_address,
            subject=f'🎉 Welcome to {brand} - Your Entertainment Journey Starts Here!',
            html=html,
            text=text,
        )

    @staticmethod
    def _qr_url(context: BookingEmailContext) -> str:
        payload = build_ticket_qr_payload(
            booking_id=context.booking_id,
            event_id=context.event_id,
            seat_count=context.seat_count,
            customer_email=context.customer_email,
            booking_reference=context.reference,
        )
        return qr_image_url(payload)

    def _layout(
        self, *, header_color: str, icon: str, heading: str, tagline: str, body: str, footer: str
    ) -> str:
        support = escape(self.identity.support_address)
        return f"""
<div style="font-family: 'Inter', Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: {header_color}; color: white; padding: 40px 30px; text-align: center;">
    <span style="font-size: 40px;">{icon}</span>
    <h1 style="margin: 0;">{heading}</h1>
    <p style="margin: 15px 0 0 0;">{tagline}</p>
  </div>
  <div style="padding: 30px; background: #f8fafc;">{body}
  </div>
  <div style="background: #2d3748; color: white; padding: 30px; text-align: center;">
    <p>{footer}</p>
    <p><a href="mailto:{support}" style="color: #63b3ed;">{support}</a></p>
  </div>
</div>""".strip()