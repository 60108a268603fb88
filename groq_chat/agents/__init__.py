"""补全客户端、对话编排器与采集端口。"""
