# app.py
from trestle_proxy import create_app
from trestle_proxy.config import ProxyConfig
from trestle_proxy.scheduler import start_scheduler

config = ProxyConfig.from_env()
app = create_app(config)

if __name__ == "__main__":
    # Run with: python app.py
    start_scheduler(config)
    app.run(host="0.0.0.0", port=config.port)
