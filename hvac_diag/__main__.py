import uvicorn  # type: ignore

from hvac_diag.config import HOST, PORT
from hvac_diag.main import app


def main():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
