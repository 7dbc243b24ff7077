from __future__ import annotations

from typing import Dict

LANGUAGES = ("zh-TW", "zh-CN", "en")

LANGUAGE_NAMES = {
    "zh-TW": "繁體中文",
    "zh-CN": "简体中文",
    "en": "English",
}

_EN: Dict[str, str] = {
    "app.title": "Old Building Reconstruction Calculator",
    "app.caption": "Floor areas • Cost breakdown • Sales revenue • Owner exchange ratio",
    "action.loadDemo": "Load demo",
    "action.reset": "Reset",
    "action.downloadPdf": "Download PDF report",
    "section.settings": "Settings",
    "section.language": "Language",
    "section.note": "Unit costs: build cost per ping, statutory cost per m².",

    "tab.basic": "Basic",
    "tab.regulations": "Regulations",
    "tab.costs": "Costs",
    "tab.sales": "Sales & Rights",
    "tab.dashboard": "Dashboard",
    "tab.sensitivity": "Sensitivity",
    "tab.audit": "Audit",
    "tab.report": "Report",

    "label.lot_number": "Lot number",
    "label.section": "Land section",
    "label.zoning": "Zoning",
    "label.area": "Site area",
    "label.road_width": "Road width",
    "label.height": "Building height",
    "label.bc_ratio": "Building coverage ratio",
    "label.far": "Floor area ratio",
    "label.excavate": "Excavation ratio",
    "label.floors": "Floors above ground",
    "label.basement": "Basement levels",
    "label.roof_layers": "Roof structure layers",
    "label.mech": "Mechanical room exemption",
    "label.stair": "Stair / evacuation exemption",
    "label.balcony": "Balcony exemption",
    "label.roof": "Roof structure ratio",
    "label.common": "Common area ratio",
    "label.park_size": "Parking space size",
    "label.build_cost": "Build cost",
    "label.legal_cost": "Statutory unit cost",
    "label.plan_fee": "Planning fee",
    "label.eval_fee": "Structural evaluation fee",
    "label.boundary_fee": "Boundary survey fee",
    "label.drill_fee": "Drilling fee",
    "label.neighbor_fee": "Neighbour coordination fee",
    "label.park_price": "Parking price",
    "label.price_1f": "Ground floor price",
    "label.price_2f": "Upper floor price",
    "label.old_ping": "Existing owned area",
    "label.new_units": "New units",
    "label.owners": "Owners",
    "label.sell_percent": "Share of upper floors sold",

    "card.costDist": "Cost distribution",
    "card.breakdown": "Fee breakdown",
    "card.areas": "Floor areas",
    "card.sales": "Sellable area",
    "card.revenue": "Revenue",
    "card.equity": "Owner return",

    "cat.rebuild": "Construction",
    "cat.management": "Management",
    "cat.interest": "Loan interest",
    "cat.design": "Design fee",
    "cat.other": "Other fees",

    "bd.fund": "Construction fund",
    "bd.license_fee": "Licence fee",
    "bd.review_fee": "Review fee",
    "bd.bonus_app_fee": "Bonus application fee",
    "bd.pipe_fee": "Utility connections",
    "bd.cadastral_fee": "Cadastral fee",
    "bd.rights_fees": "Rights & survey fees",
    "bd.stamp_tax": "Stamp tax",
    "bd.trust_fee": "Trust fee",

    "row.maxBuildArea": "Max building footprint",
    "row.legalFAR": "Legal floor area",
    "row.bonusFAR": "Bonus floor area",
    "row.totalPing": "Total floor area",
    "row.mech": "Mechanical",
    "row.stair": "Stair",
    "row.balcony": "Balcony",
    "row.roof": "Roof",
    "row.basement": "Basement",
    "row.totalParks": "Parking spaces",
    "row.firstFloorSale": "Ground floor sale",
    "row.upperFloorSale": "Upper floor sale",
    "row.totalSalePing": "Total sellable",
    "row.landEfficiency": "Land efficiency",
    "row.totalCost": "Total cost",
    "row.loanYears": "Loan period",
    "row.parkRevenue": "Parking revenue",
    "row.firstRevenue": "Ground floor revenue",
    "row.upperRevenue": "Upper floor revenue",
    "row.totalRevenue": "Total revenue",
    "row.commonBurden": "Common burden",
    "row.sellParks": "Parking sold",
    "row.sellUpperPing": "Upper floors sold",
    "row.cashBack": "Cash back",
    "row.returnIndoor": "Indoor area returned",
    "row.pingExchange": "Exchange ratio",
    "row.returnRatio": "Return ratio",

    "result.exchange": "One-for-one exchange ratio",
    "result.congrats": "Target met: at least one-for-one",
    "result.notYet": "Below one-for-one",
    "sensitivity.caption": "Common burden % vs sale price (rows) and build cost (columns).",
    "report.title": "Reconstruction Feasibility Report",
    "report.summary": "Summary",
    "report.inputs": "Key inputs",
    "report.audit": "Audit trail",
    "report.generated": "Generated",

    "unit.wan": "Wan",
    "unit.ping": "ping",
    "unit.m2": "m²",
    "unit.m": "m",
    "unit.cars": "cars",
    "unit.years": "years",
    "unit.floors": "",
    "unit.units": "",
    "unit.people": "",
    "unit.perPing": "$/ping",
    "unit.perM2": "$/m²",
    "unit.currency": "$",
}

_ZH_TW: Dict[str, str] = {
    "app.title": "危老重建試算",
    "app.caption": "樓地板面積 • 成本明細 • 銷售收入 • 地主換回比例",
    "action.loadDemo": "載入範例",
    "action.reset": "重設",
    "action.downloadPdf": "下載 PDF 報告",
    "section.settings": "設定",
    "section.language": "語言",
    "section.note": "營造單價以每坪計，法定工程造價以每平方公尺計。",

    "tab.basic": "基本資料",
    "tab.regulations": "法規",
    "tab.costs": "成本",
    "tab.sales": "銷售與權利",
    "tab.dashboard": "結果",
    "tab.sensitivity": "敏感度",
    "tab.audit": "計算明細",
    "tab.report": "報告",

    "label.lot_number": "地號",
    "label.section": "地段",
    "label.zoning": "使用分區",
    "label.area": "基地面積",
    "label.road_width": "面前道路寬度",
    "label.height": "建物高度",
    "label.bc_ratio": "建蔽率",
    "label.far": "容積率",
    "label.excavate": "開挖率",
    "label.floors": "地上層數",
    "label.basement": "地下層數",
    "label.roof_layers": "屋突層數",
    "label.mech": "機電設備空間",
    "label.stair": "梯廳及安全梯",
    "label.balcony": "陽台",
    "label.roof": "屋突比例",
    "label.common": "公設比",
    "label.park_size": "每車位坪數",
    "label.build_cost": "營造單價",
    "label.legal_cost": "法定工程造價",
    "label.plan_fee": "規劃費",
    "label.eval_fee": "結構評估費",
    "label.boundary_fee": "鑑界費",
    "label.drill_fee": "鑽探費",
    "label.neighbor_fee": "鄰房協調費",
    "label.park_price": "車位售價",
    "label.price_1f": "一樓單價",
    "label.price_2f": "二樓以上單價",
    "label.old_ping": "原有坪數",
    "label.new_units": "新建戶數",
    "label.owners": "地主人數",
    "label.sell_percent": "二樓以上出售比例",

    "card.costDist": "成本分布",
    "card.breakdown": "費用明細",
    "card.areas": "面積",
    "card.sales": "可售面積",
    "card.revenue": "銷售收入",
    "card.equity": "地主分回",

    "cat.rebuild": "營造費用",
    "cat.management": "管理費用",
    "cat.interest": "貸款利息",
    "cat.design": "設計費",
    "cat.other": "其他費用",

    "bd.fund": "營建基金",
    "bd.license_fee": "建照規費",
    "bd.review_fee": "審查費",
    "bd.bonus_app_fee": "容積獎勵申請費",
    "bd.pipe_fee": "管線費",
    "bd.cadastral_fee": "地政規費",
    "bd.rights_fees": "權利變換相關費用",
    "bd.stamp_tax": "印花稅",
    "bd.trust_fee": "信託費",

    "row.maxBuildArea": "最大建築面積",
    "row.legalFAR": "法定容積",
    "row.bonusFAR": "獎勵容積",
    "row.totalPing": "總樓地板面積",
    "row.mech": "機電",
    "row.stair": "梯廳",
    "row.balcony": "陽台",
    "row.roof": "屋突",
    "row.basement": "地下室",
    "row.totalParks": "車位數",
    "row.firstFloorSale": "一樓可售",
    "row.upperFloorSale": "二樓以上可售",
    "row.totalSalePing": "總可售面積",
    "row.landEfficiency": "土地效益",
    "row.totalCost": "總成本",
    "row.loanYears": "貸款年期",
    "row.parkRevenue": "車位收入",
    "row.firstRevenue": "一樓收入",
    "row.upperRevenue": "二樓以上收入",
    "row.totalRevenue": "總銷售收入",
    "row.commonBurden": "共同負擔比",
    "row.sellParks": "出售車位",
    "row.sellUpperPing": "出售坪數",
    "row.cashBack": "找補現金",
    "row.returnIndoor": "分回室內坪數",
    "row.pingExchange": "換回比例",
    "row.returnRatio": "分回比例",

    "result.exchange": "一坪換一坪比例",
    "result.congrats": "恭喜！可達一坪換一坪",
    "result.notYet": "尚未達到一坪換一坪",
    "sensitivity.caption": "共同負擔比：售價變動（列）對營造單價變動（欄）。",
    "report.title": "危老重建試算報告",
    "report.summary": "摘要",
    "report.inputs": "主要參數",
    "report.audit": "計算明細",
    "report.generated": "產生時間",

    "unit.wan": "萬",
    "unit.ping": "坪",
    "unit.m2": "㎡",
    "unit.m": "公尺",
    "unit.cars": "車",
    "unit.years": "年",
    "unit.floors": "層",
    "unit.units": "戶",
    "unit.people": "人",
    "unit.perPing": "元/坪",
    "unit.perM2": "元/平方公尺",
    "unit.currency": "元",
}

_ZH_CN: Dict[str, str] = {
    **_ZH_TW,
    "app.title": "危老重建试算",
    "app.caption": "楼地板面积 • 成本明细 • 销售收入 • 地主换回比例",
    "action.loadDemo": "载入范例",
    "action.reset": "重设",
    "action.downloadPdf": "下载 PDF 报告",
    "section.settings": "设定",
    "section.language": "语言",
    "section.note": "营造单价以每坪计，法定工程造价以每平方公尺计。",
    "tab.basic": "基本资料",
    "tab.regulations": "法规",
    "tab.sales": "销售与权利",
    "tab.dashboard": "结果",
    "tab.sensitivity": "敏感度",
    "tab.audit": "计算明细",
    "tab.report": "报告",
    "label.lot_number": "地号",
    "label.zoning": "使用分区",
    "label.road_width": "面前道路宽度",
    "label.height": "建物高度",
    "label.bc_ratio": "建蔽率",
    "label.far": "容积率",
    "label.floors": "地上层数",
    "label.basement": "地下层数",
    "label.roof_layers": "屋突层数",
    "label.mech": "机电设备空间",
    "label.stair": "梯厅及安全梯",
    "label.balcony": "阳台",
    "label.common": "公设比",
    "label.park_size": "每车位坪数",
    "label.build_cost": "营造单价",
    "label.legal_cost": "法定工程造价",
    "label.plan_fee": "规划费",
    "label.eval_fee": "结构评估费",
    "label.boundary_fee": "鉴界费",
    "label.drill_fee": "钻探费",
    "label.neighbor_fee": "邻房协调费",
    "label.park_price": "车位售价",
    "label.price_1f": "一楼单价",
    "label.price_2f": "二楼以上单价",
    "label.old_ping": "原有坪数",
    "label.new_units": "新建户数",
    "label.owners": "地主人数",
    "label.sell_percent": "二楼以上出售比例",
    "card.costDist": "成本分布",
    "card.breakdown": "费用明细",
    "card.areas": "面积",
    "card.sales": "可售面积",
    "card.revenue": "销售收入",
    "card.equity": "地主分回",
    "cat.rebuild": "营造费用",
    "cat.management": "管理费用",
    "cat.interest": "贷款利息",
    "cat.design": "设计费",
    "cat.other": "其他费用",
    "bd.fund": "营建基金",
    "bd.license_fee": "建照规费",
    "bd.review_fee": "审查费",
    "bd.bonus_app_fee": "容积奖励申请费",
    "bd.pipe_fee": "管线费",
    "bd.cadastral_fee": "地政规费",
    "bd.rights_fees": "权利变换相关费用",
    "bd.stamp_tax": "印花税",
    "bd.trust_fee": "信托费",
    "row.maxBuildArea": "最大建筑面积",
    "row.legalFAR": "法定容积",
    "row.bonusFAR": "奖励容积",
    "row.totalPing": "总楼地板面积",
    "row.mech": "机电",
    "row.stair": "梯厅",
    "row.balcony": "阳台",
    "row.basement": "地下室",
    "row.totalParks": "车位数",
    "row.firstFloorSale": "一楼可售",
    "row.upperFloorSale": "二楼以上可售",
    "row.totalSalePing": "总可售面积",
    "row.landEfficiency": "土地效益",
    "row.totalCost": "总成本",
    "row.loanYears": "贷款年期",
    "row.parkRevenue": "车位收入",
    "row.firstRevenue": "一楼收入",
    "row.upperRevenue": "二楼以上收入",
    "row.totalRevenue": "总销售收入",
    "row.commonBurden": "共同负担比",
    "row.sellParks": "出售车位",
    "row.sellUpperPing": "出售坪数",
    "row.cashBack": "找补现金",
    "row.returnIndoor": "分回室内坪数",
    "row.pingExchange": "换回比例",
    "row.returnRatio": "分回比例",
    "result.exchange": "一坪换一坪比例",
    "result.congrats": "恭喜！可达一坪换一坪",
    "result.notYet": "尚未达到一坪换一坪",
    "sensitivity.caption": "共同负担比：售价变动（行）对营造单价变动（列）。",
    "report.title": "危老重建试算报告",
    "report.summary": "摘要",
    "report.inputs": "主要参数",
    "report.audit": "计算明细",
    "report.generated": "产生时间",
    "unit.cars": "车",
    "unit.floors": "层",
    "unit.units": "户",
    "unit.perPing": "元/坪",
}

_TABLES = {"en": _EN, "zh-TW": _ZH_TW, "zh-CN": _ZH_CN}


def t(lang: str, key: str) -> str:
    table = _TABLES.get(lang, _ZH_TW)
    if key in table:
        return table[key]
    return _EN.get(key, key)
