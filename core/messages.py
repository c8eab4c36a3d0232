# core/messages.py

def print_message(message: str, level: str = None, url: str = None):
    """
    Prints a single diagnostic line, e.g. "[WARNING] Rewriter failed (/old-page) ".

    Args:
        message (str): The message to print.
        level (str): Optional log level, e.g. NOTICE or WARNING.
        url (str): Optional URL that was being rewritten.
    """
    url = f"({url}) " if url else ''
    level = f"[{level}] " if level else ''
    print(f"{level}{message}{url}")
