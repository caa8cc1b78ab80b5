import uvicorn

from app.core.config import settings

if __name__ == '__main__':
    print(f"{settings.SERVICE_NAME} running at: http://{settings.HOST}:{settings.PORT}")
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.APP_ENV == "local")
