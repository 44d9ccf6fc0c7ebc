# ================================
# file: student_records/core/config.py
# ================================
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # DB mặc định là SQLite cạnh thư mục chạy; override bằng biến môi trường DB_URL hoặc file .env
    DB_URL: str = "sqlite:///./students.db"

    # "development" thì lỗi 500 trả kèm nội dung exception, môi trường khác thì ẩn.
    # Mặc định ẩn; máy dev tự bật bằng APP_ENV=development trong .env
    APP_ENV: str = "production"
    LOG_LEVEL: str = "INFO"

    # Phân trang danh sách học viên
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 1000

    # Tên file báo cáo (không kèm đuôi)
    REPORT_FILENAME: str = "StudentReport"

    # Pydantic v2: cấu hình đọc .env, bỏ qua biến lạ
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.strip().lower() == "development"


# Tạo singleton settings cho toàn app
settings = Settings()
