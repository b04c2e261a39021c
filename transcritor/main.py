from flask import Flask, jsonify, request
from dotenv import load_dotenv
import json
import logging
import os

from .engine import InvalidTextError, default_transcriber, transcribe

load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(message)s")

app = Flask(__name__)
app.json.ensure_ascii = False

PORT = int(os.environ.get("PORT", 8000))

# Rule table is read once, when the service starts.
default_transcriber()


def _request_text():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data.get("text")
    return request.form.get("text")


@app.after_request
def allow_any_origin(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@app.route("/transcricao", methods=["POST"])
def transcricao():
    try:
        text = _request_text()
        logging.info(
            json.dumps(
                {"event": "request", "chars": len(text) if isinstance(text, str) else None}
            )
        )
        resultado = transcribe(text)
    except InvalidTextError as e:
        logging.info(json.dumps({"event": "invalid_text"}))
        return jsonify({"erro": str(e)}), 400
    except Exception as e:
        logging.exception("Error in /transcricao")
        return jsonify({"erro": f"Erro no servidor: {e}"}), 500

    logging.info(json.dumps({"event": "transcribed", "chars": len(resultado)}))
    return jsonify({"resultado": resultado}), 200


@app.errorhandler(404)
@app.errorhandler(405)
def not_found(_error):
    return jsonify({"message": f"Rota '{request.full_path.rstrip('?')}' não encontrada"}), 404


if __name__ == "__main__":
    logging.info("Servidor rodando na porta %s", PORT)
    app.run(host="0.0.0.0", port=PORT)
