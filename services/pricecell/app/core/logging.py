import logging
import sys
import json

# campi fissi della riga JSON: un dict loggato non può sovrascriverli
_BASE_FIELDS = ("level", "time", "logger")


class JSONFormatter(logging.Formatter):
    """
    Una riga JSON per record.

    Se il messaggio è un dict (es. logger.info({"event": "price_set", ...}))
    le sue chiavi finiscono come campi di primo livello, così "event"
    si può filtrare direttamente; altrimenti il testo va in "message".
    """

    def format(self, record):
        log = {
            "level": record.levelname,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "logger": record.name,
        }

        if isinstance(record.msg, dict) and not record.args:
            for key, value in record.msg.items():
                if key not in _BASE_FIELDS:
                    log[key] = value
        else:
            log["message"] = record.getMessage()

        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def setup_logging(level: str = "INFO"):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    # force=True: uvicorn/pytest possono aver già configurato il root logger
    logging.basicConfig(level=level, handlers=[handler], force=True)
