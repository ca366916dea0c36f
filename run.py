# run.py
import os
import sys
import uvicorn

def main():
    try:
        uvicorn.run(
            "pdf_gallery.main:app",
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            reload=os.getenv("RELOAD", "false").lower() == "true"
        )
    except Exception as e:
        print(f"Error starting the server: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
