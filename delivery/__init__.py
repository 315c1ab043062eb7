from delivery.output import EmailSink, deliver_cli, deliver_email, format_record

__all__ = ["EmailSink", "deliver_cli", "deliver_email", "format_record"]
