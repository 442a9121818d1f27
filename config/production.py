import os

from config.config import AWS_CONFIG, TABLES, Config, env_flag

S3_BUCKET = Config.S3_BUCKET
REKOGNITION_COLLECTION_ID = Config.REKOGNITION_COLLECTION_ID
FACE_MATCH_THRESHOLD = Config.FACE_MATCH_THRESHOLD
DUPLICATE_CHECK_ON_APPROVE = Config.DUPLICATE_CHECK_ON_APPROVE
PORT = Config.PORT
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

AUTO_INIT_AWS = env_flag("AUTO_INIT_AWS", "0")
