# run_dev.py

# Start the API for local development:
#     python -m smart_rent.run_dev
#
# PORT, DATABASE_URL, CLIENT_URL, JWT_SECRET and UPLOAD_DIR are read from
# the environment (see smart_rent/core/config.py).

import uvicorn

from smart_rent.core.config import settings


def main():
    uvicorn.run("smart_rent.main:app", host="0.0.0.0", port=settings.port, reload=True)


if __name__ == "__main__":
    main()
