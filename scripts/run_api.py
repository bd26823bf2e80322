#!/usr/bin/env python3
"""
Start the step navigation API server
"""
import os
import sys
from pathlib import Path

# プロジェクトルートをPYTHONPATHに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn
from dotenv import load_dotenv

if __name__ == "__main__":
    load_dotenv(project_root / ".env")
    uvicorn.run(
        "api.main:app",
        host=os.getenv("NAVIGATION_API_HOST", "0.0.0.0"),
        port=int(os.getenv("NAVIGATION_API_PORT", "8000")),
        reload=True,  # 開発時の自動リロード
    )
