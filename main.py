# main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from config import settings
from database import MongoConnection
from routes import index, mentors, students

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Mentor-Student API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(index.router)
app.include_router(mentors.router)
app.include_router(students.router)


@app.on_event("startup")
async def startup_event():
    app.state.mongo = MongoConnection(settings.mongo_uri, settings.mongo_db_name)
    app.state.mongo.connect()
    try:
        await app.state.mongo.init_indexes()
    except PyMongoError as e:
        # Keep serving; requests surface the store error as a 500
        logger.error(f"Error connecting to MongoDB: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    mongo = getattr(app.state, "mongo", None)
    if mongo is not None:
        mongo.close()


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Server is running on port {settings.port}")
    uvicorn.run("main:app", host=settings.host, port=settings.port)
