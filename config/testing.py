from config.config import AWS_CONFIG, TABLES, Config

S3_BUCKET = "test-bucket"
REKOGNITION_COLLECTION_ID = "test-collection"
FACE_MATCH_THRESHOLD = 75.0
DUPLICATE_CHECK_ON_APPROVE = False
PORT = Config.PORT
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_AWS = False
