import uvicorn
from vocab_mastery.main import app

if __name__ == "__main__":
    uvicorn.run(
        "vocab_mastery.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
    )
