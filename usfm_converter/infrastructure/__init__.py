"""基础设施层：日志与本地存储适配器。"""
